"""Warden CLI application using Typer.

Operational commands: signing-key generation, JWKS export, schema
creation, the expired refresh-token sweep and the API server.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
import uvicorn
from rich.console import Console
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from warden.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    display_url,
)
from warden_auth.exceptions import KeyMaterialError
from warden_auth.persistence.sqlalchemy import RefreshTokenRepositorySQLAlchemy
from warden_auth.services.jwt_service import build_jwks
from warden_auth.services.signing_keys import (
    DEFAULT_KEY_SIZE,
    generate_key_pair_pem,
    load_public_key,
)
from warden_config.settings import get_settings

PRIVATE_KEY_FILENAME = "private_key.pem"
PUBLIC_KEY_FILENAME = "public_key.pem"

app = typer.Typer(
    name="warden",
    help="Warden - credential and session service CLI",
    no_args_is_help=True,
)
console = Console()

keys_app = typer.Typer(
    name="keys",
    help="Signing key utilities",
    no_args_is_help=True,
)
db_app = typer.Typer(
    name="db",
    help="Database schema utilities",
    no_args_is_help=True,
)
tokens_app = typer.Typer(
    name="tokens",
    help="Refresh token maintenance",
    no_args_is_help=True,
)
app.add_typer(keys_app)
app.add_typer(db_app)
app.add_typer(tokens_app)


@keys_app.command("generate")
def generate_keys(
    out_dir: Annotated[
        Path,
        typer.Option("--out-dir", help="Directory for the PEM files"),
    ] = Path("keys"),
    bits: Annotated[
        int,
        typer.Option("--bits", min=2048, help="RSA modulus size"),
    ] = DEFAULT_KEY_SIZE,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing key files"),
    ] = False,
) -> None:
    """Generate an RSA key pair for signing access tokens.

    Writes private_key.pem (PKCS#8) and public_key.pem (SubjectPublicKeyInfo).
    """
    private_path = out_dir / PRIVATE_KEY_FILENAME
    public_path = out_dir / PUBLIC_KEY_FILENAME

    existing = [p for p in (private_path, public_path) if p.exists()]
    if existing and not force:
        for path in existing:
            console.print(f"[red]Refusing to overwrite {path}[/red]")
        console.print("[dim]Pass --force to replace the existing keys.[/dim]")
        raise typer.Exit(code=1)

    console.print(f"\n[bold green]Generating {bits}-bit RSA key pair[/bold green]")
    private_pem, public_pem = generate_key_pair_pem(bits=bits)

    out_dir.mkdir(parents=True, exist_ok=True)
    private_path.write_bytes(private_pem)
    private_path.chmod(0o600)
    public_path.write_bytes(public_pem)

    console.print(f"[cyan]Private key[/cyan]: {private_path}")
    console.print(f"[cyan]Public key[/cyan]:  {public_path}")
    console.print(
        "[yellow]⚠  Keep the private key secret and never commit it "
        "to version control![/yellow]\n"
    )


@keys_app.command("jwks")
def export_jwks(
    public_key: Annotated[
        Path | None,
        typer.Option("--public-key", help="PEM file (defaults to settings)"),
    ] = None,
) -> None:
    """Print the JSON Web Key Set for the public key."""
    path = public_key or get_settings().jwt_public_key_path
    try:
        key = load_public_key(path)
    except KeyMaterialError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from e

    # Plain echo: rich would wrap the long modulus
    typer.echo(json.dumps(build_jwks(key), indent=2))


def _get_engine() -> AsyncEngine:
    return create_async_engine(get_settings().database_url, pool_pre_ping=True)


async def _purge_expired_tokens(engine: AsyncEngine) -> int:
    session_maker = async_sessionmaker(engine, expire_on_commit=False)
    async with session_maker() as session:
        try:
            deleted = await RefreshTokenRepositorySQLAlchemy(session).delete_expired()
            await session.commit()
        except Exception:
            await session.rollback()
            raise
    return deleted


async def _run_purge() -> int:
    engine = _get_engine()
    try:
        return await _purge_expired_tokens(engine)
    finally:
        await engine.dispose()


@db_app.command("init")
def db_init() -> None:
    """Create missing tables (idempotent)."""
    url = get_settings().database_url
    console.print(f"Database: {display_url(url)}")
    asyncio.run(create_tables())
    console.print("[green]Database schema is up to date[/green]")


@tokens_app.command("purge-expired")
def purge_expired() -> None:
    """Delete refresh-token records that are past their expiry."""
    deleted = asyncio.run(_run_purge())
    console.print(f"[green]Deleted {deleted} expired refresh tokens[/green]")


@app.command("serve")
def serve() -> None:
    """Run the HTTP API on the configured host and port.

    ``DEBUG=true`` enables auto-reload.
    """
    settings = get_settings()
    console.print(
        f"[bold green]Serving {settings.app_name} on "
        f"{settings.api_host}:{settings.api_port}[/bold green]"
    )
    uvicorn.run(
        "warden.presentation.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_config=None,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()

"""Database initialization utilities."""

import logging

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

# Import models to register them with their metadata
import warden_auth.persistence.sqlalchemy.models  # noqa: F401
import warden_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from warden.infrastructure.persistence.sqlalchemy.models.base import Base
from warden_auth.persistence.sqlalchemy import AuthBase
from warden_config.settings import get_settings

logger = logging.getLogger(__name__)


def all_metadata() -> list[MetaData]:
    """Metadata of every table the service owns (accounts and auth)."""
    return [Base.metadata, AuthBase.metadata]


def display_url(database_url: str) -> str:
    """Strip credentials from a database URL for logging."""
    return database_url.split("@")[-1] if "@" in database_url else database_url


def _get_engine() -> AsyncEngine:
    """Get the database engine for initialization."""
    settings = get_settings()
    return create_async_engine(
        settings.database_url,
        echo=False,
        pool_pre_ping=True,
    )


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.

    Parameters
    ----------
    engine
        Engine to use; a settings-based engine is created and disposed
        when omitted
    """
    owns_engine = engine is None
    engine = engine or _get_engine()
    logger.info("Ensuring all database tables exist on %s", display_url(str(engine.url)))

    try:
        async with engine.begin() as conn:
            for metadata in all_metadata():
                await conn.run_sync(metadata.create_all)
    finally:
        if owns_engine:
            await engine.dispose()

    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    owns_engine = engine is None
    engine = engine or _get_engine()
    logger.warning("Dropping all database tables...")

    try:
        async with engine.begin() as conn:
            for metadata in reversed(all_metadata()):
                await conn.run_sync(metadata.drop_all)
    finally:
        if owns_engine:
            await engine.dispose()

    logger.info("Database tables dropped successfully")

"""Warden - credential and session-issuance service.

The ``warden`` package holds the pieces shared by the auth and identity
packages (time helpers, SQLAlchemy base) plus the presentation layer:

    warden/
    ├── domain/shared/      # Time utilities
    ├── infrastructure/     # SQLAlchemy base and schema bootstrap
    └── presentation/
        ├── api/            # FastAPI application
        └── cli/            # Typer command line
"""

"""
Pytest configuration for integration tests.

- api/: the HTTP surface over in-memory SQLite (always runs)
- persistence/: behaviour that needs a real PostgreSQL from
  Testcontainers (marked @pytest.mark.integration, auto-skipped)
"""

from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    pg_session_maker,
    postgres_container,
    sqlite_engine,
    sqlite_session,
    sqlite_session_maker,
)

__all__ = [
    "async_engine",
    "db_session",
    "pg_session_maker",
    "postgres_container",
    "sqlite_engine",
    "sqlite_session",
    "sqlite_session_maker",
]

"""
Pytest configuration for unit tests.

Persistence unit tests run against in-memory SQLite; re-export the shared
fixtures so they are available everywhere under unit/.
"""

from tests.shared.fixtures.database import (
    sqlite_engine,
    sqlite_session,
    sqlite_session_maker,
)

__all__ = [
    "sqlite_engine",
    "sqlite_session",
    "sqlite_session_maker",
]

"""
Pytest configuration for cross-domain tests.

These tests wire the real services and repositories together over
in-memory SQLite.
"""

import pytest

from tests.shared.fixtures.database import (
    sqlite_engine,
    sqlite_session,
    sqlite_session_maker,
)
from warden_auth import JWTService, PasswordHashingService, RefreshTokenService
from warden_auth.persistence.sqlalchemy import RefreshTokenRepositorySQLAlchemy
from warden_identity import AuthenticationService
from warden_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
)

__all__ = [
    "sqlite_engine",
    "sqlite_session",
    "sqlite_session_maker",
]

# Lowest bcrypt cost; tests do not need slow hashes
TEST_HASH_ROUNDS = 4


@pytest.fixture(scope="session")
def password_service() -> PasswordHashingService:
    return PasswordHashingService(rounds=TEST_HASH_ROUNDS)


@pytest.fixture(scope="session")
def jwt_service(rsa_key_pair) -> JWTService:
    return JWTService(rsa_key_pair.private_key, rsa_key_pair.public_key)


@pytest.fixture
def refresh_token_repo(sqlite_session) -> RefreshTokenRepositorySQLAlchemy:
    return RefreshTokenRepositorySQLAlchemy(sqlite_session)


@pytest.fixture
def auth_service(
    sqlite_session,
    refresh_token_repo,
    password_service,
    jwt_service,
) -> AuthenticationService:
    """AuthenticationService backed by the real repositories."""
    return AuthenticationService(
        account_repository=AccountRepositorySQLAlchemy(sqlite_session),
        refresh_token_repository=refresh_token_repo,
        password_service=password_service,
        jwt_service=jwt_service,
        refresh_token_service=RefreshTokenService(),
    )

"""Warden Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of how accounts are stored. It handles:
- Password hashing (bcrypt)
- RS256 access tokens and their JWKS export
- Opaque refresh tokens (with pluggable persistence)

Architecture:
    warden_auth/
    ├── services/           # Pure logic (password hashing, JWT, refresh tokens)
    ├── repositories/       # Abstract interfaces
    ├── persistence/        # Implementations by technology
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from warden_auth import JWTService, PasswordHashingService

    from warden_auth.persistence.sqlalchemy import (
        RefreshTokenRepositorySQLAlchemy,
        AuthBase,
    )
"""

from warden_auth.exceptions import (
    AuthError,
    ErrorCode,
    InternalAuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    KeyMaterialError,
    PasswordHashingError,
    TokenExpiredError,
    TokenFailureReason,
    TokenRevokedError,
    UnauthorizedError,
    WeakPasswordError,
)
from warden_auth.repositories import RefreshTokenData, RefreshTokenRepository
from warden_auth.schemas import AccessTokenClaims, IssuedRefreshToken
from warden_auth.services import (
    JWTService,
    PasswordHashingService,
    RefreshTokenService,
)

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    "RefreshTokenService",
    # Repositories (interfaces)
    "RefreshTokenRepository",
    "RefreshTokenData",
    # Schemas
    "AccessTokenClaims",
    "IssuedRefreshToken",
    # Exceptions
    "AuthError",
    "ErrorCode",
    "TokenFailureReason",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenRevokedError",
    "InvalidCredentialsError",
    "UnauthorizedError",
    "WeakPasswordError",
    "InternalAuthError",
    "PasswordHashingError",
    "KeyMaterialError",
]

"""FastAPI dependency injection for the Warden API.

Provides dependencies for:
- Database sessions
- Authentication services (built once per app, kept on ``app.state``)
- Current access-token claims from the Authorization header
"""

import logging
from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from warden_auth import (
    AccessTokenClaims,
    JWTService,
    PasswordHashingService,
    RefreshTokenService,
    UnauthorizedError,
)
from warden_auth.persistence.sqlalchemy import RefreshTokenRepositorySQLAlchemy
from warden_config.settings import get_settings
from warden_identity import AuthenticationService
from warden_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_settings().database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    One session (and one transaction) per request. Routes commit on success
    and roll back on failure.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(request: Request) -> JWTService:
    """JWT service built from the key files at startup."""
    return request.app.state.jwt_service


def get_password_service(request: Request) -> PasswordHashingService:
    """Get password hashing service."""
    return request.app.state.password_service


def get_refresh_token_service(request: Request) -> RefreshTokenService:
    return request.app.state.refresh_token_service


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]


async def get_authentication_service(
    session: DBSession,
    jwt_service: JWTServiceDep,
    password_service: Annotated[PasswordHashingService, Depends(get_password_service)],
    refresh_token_service: Annotated[
        RefreshTokenService,
        Depends(get_refresh_token_service),
    ],
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    Both repositories share the request session, so everything the service
    does in one call lands in the same transaction.
    """
    return AuthenticationService(
        account_repository=AccountRepositorySQLAlchemy(session),
        refresh_token_repository=RefreshTokenRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
        refresh_token_service=refresh_token_service,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current Account (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_claims(
    auth_service: AuthService,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ] = None,
) -> AccessTokenClaims:
    """
    Validate the Bearer token from the Authorization header.

    Raises
    ------
    UnauthorizedError
        If no Bearer token was sent
    InvalidTokenError
        If the token fails validation
    """
    if credentials is None:
        msg = "Authentication required"
        raise UnauthorizedError(msg)

    return auth_service.validate_access_token(credentials.credentials)


# Type alias for injected token claims
CurrentClaims = Annotated[AccessTokenClaims, Depends(get_current_claims)]

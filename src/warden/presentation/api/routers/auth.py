"""Authentication router for registration, login and session management."""

import logging

from fastapi import APIRouter, status

from warden.presentation.api.dependencies import AuthService, CurrentClaims, DBSession
from warden.presentation.api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    LogoutAllResponse,
    MessageResponse,
    ProfileResponse,
    RefreshRequest,
    RegisterRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses={
        201: {"description": "Account registered successfully"},
        400: {"description": "Invalid input (weak password)"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """
    Create an account and return its first token pair.
    """
    try:
        result = await auth_service.register(
            email=request.email,
            password=request.password,
            name=request.name,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return AuthResponse.from_result(result)


@router.post(
    "/login",
    summary="Authenticate with email and password",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """
    Authenticate with email and password.

    Unknown email and wrong password produce the same response.
    """
    try:
        result = await auth_service.login(
            email=request.email,
            password=request.password,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return AuthResponse.from_result(result)


@router.post(
    "/refresh",
    summary="Rotate a refresh token",
    responses={
        200: {"description": "Tokens refreshed successfully"},
        401: {"description": "Refresh token invalid, revoked or expired"},
    },
)
async def refresh_token(
    request: RefreshRequest,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """
    Exchange a refresh token for a new token pair.

    The presented refresh token is revoked; each one works exactly once.
    """
    try:
        result = await auth_service.refresh_token(request.refresh_token)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return AuthResponse.from_result(result)


@router.post(
    "/logout",
    summary="Revoke a refresh token",
)
async def logout(
    request: RefreshRequest,
    auth_service: AuthService,
    session: DBSession,
) -> MessageResponse:
    """
    Revoke the given refresh token. Unknown tokens are accepted silently.
    """
    try:
        await auth_service.logout(request.refresh_token)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return MessageResponse(message="Logged out successfully")


@router.post(
    "/logout-all",
    summary="Revoke every refresh token of the current account",
    responses={
        200: {"description": "All sessions revoked"},
        401: {"description": "Not authenticated"},
    },
)
async def logout_all(
    claims: CurrentClaims,
    auth_service: AuthService,
    session: DBSession,
) -> LogoutAllResponse:
    """
    Log out everywhere. Requires a valid access token.

    Access tokens already issued stay valid until they expire.
    """
    try:
        revoked = await auth_service.logout_all(claims.account_id)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return LogoutAllResponse(
        message="Logged out from all sessions",
        revoked_sessions=revoked,
    )


@router.get(
    "/profile",
    summary="Get the current account",
    responses={
        200: {"description": "Current account data"},
        401: {"description": "Not authenticated"},
        404: {"description": "Account no longer exists"},
    },
)
async def get_profile(
    claims: CurrentClaims,
    auth_service: AuthService,
) -> ProfileResponse:
    """
    Return the account the access token was issued for.
    """
    account = await auth_service.get_account(claims.account_id)
    return ProfileResponse.from_account(account)

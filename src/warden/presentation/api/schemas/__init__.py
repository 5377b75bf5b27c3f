"""Pydantic schemas for API request/response models."""

from warden.presentation.api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    LogoutAllResponse,
    MessageResponse,
    ProfileResponse,
    RefreshRequest,
    RegisterRequest,
    UserResponse,
)

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "LogoutAllResponse",
    "MessageResponse",
    "ProfileResponse",
    "RefreshRequest",
    "RegisterRequest",
    "UserResponse",
]

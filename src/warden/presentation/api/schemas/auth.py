"""Authentication schemas for request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from warden_identity import Account, AuthResult


class RegisterRequest(BaseModel):
    """Request schema for account registration.

    Password strength is checked by the password service so that a weak
    password is reported with the ``WEAK_PASSWORD`` code.
    """

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Password (at least 8 characters)")
    name: str = Field(..., min_length=1, max_length=255, description="Display name")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
                "name": "Ada",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for login."""

    email: EmailStr
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
            },
        },
    )


class RefreshRequest(BaseModel):
    """Request schema for token refresh and logout."""

    refresh_token: str = Field(..., min_length=1, description="Opaque refresh token")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "refresh_token": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08",
            },
        },
    )


class UserResponse(BaseModel):
    """Public view of an account."""

    id: UUID
    email: str
    name: str

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_account(cls, account: Account) -> "UserResponse":
        return cls(id=account.id, email=account.email, name=account.name)


class ProfileResponse(UserResponse):
    """Account profile with timestamps."""

    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "ProfileResponse":
        return cls(
            id=account.id,
            email=account.email,
            name=account.name,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class AuthResponse(BaseModel):
    """Token pair returned by register, login and refresh."""

    access_token: str
    refresh_token: str
    token_type: str = Field(default="Bearer")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    user: UserResponse

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJSUzI1NiIsInR5cCI6IkpXVCJ9...",
                "refresh_token": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08",
                "token_type": "Bearer",
                "expires_in": 900,
                "user": {
                    "id": "550e8400-e29b-41d4-a716-446655440000",
                    "email": "user@example.com",
                    "name": "Ada",
                },
            },
        },
    )

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        return cls(
            access_token=result.access_token,
            refresh_token=result.refresh_token,
            token_type=result.token_type,
            expires_in=result.expires_in,
            user=UserResponse.from_account(result.account),
        )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class LogoutAllResponse(MessageResponse):
    """Acknowledgement of a logout from every session."""

    revoked_sessions: int

"""Authentication services.

Provides password hashing, RS256 access tokens and opaque refresh tokens.
"""

from warden_auth.services.jwt_service import JWTService
from warden_auth.services.password_service import PasswordHashingService
from warden_auth.services.refresh_token_service import RefreshTokenService

__all__ = [
    "PasswordHashingService",
    "JWTService",
    "RefreshTokenService",
]

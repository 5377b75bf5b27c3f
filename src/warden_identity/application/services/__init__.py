"""Application services for identity management."""

from warden_identity.application.services.authentication_service import (
    AuthenticationService,
    AuthResult,
)

__all__ = ["AuthenticationService", "AuthResult"]

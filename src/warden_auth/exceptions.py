"""Authentication exceptions.

Two families live here and must never be mixed:

- ``AuthError`` and its subclasses form the closed set of outcomes a caller
  is allowed to see (wrong password, bad token, ...). Each carries a stable
  ``ErrorCode``.
- ``InternalAuthError`` covers broken infrastructure (unreadable key files,
  corrupt password hashes). It is deliberately *not* an ``AuthError`` so it
  can never be reported as "invalid credentials" or "invalid token".
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes for API clients."""

    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    ACCOUNT_ALREADY_EXISTS = "ACCOUNT_ALREADY_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_REVOKED = "TOKEN_REVOKED"
    UNAUTHORIZED = "UNAUTHORIZED"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class TokenFailureReason(str, Enum):
    """Why an access token was rejected. Logged, never returned to clients."""

    MALFORMED = "malformed"
    ALGORITHM = "algorithm"
    SIGNATURE = "signature"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    CLAIMS = "claims"


class AuthError(Exception):
    """Base exception for all caller-visible authentication errors."""

    code: ErrorCode = ErrorCode.UNAUTHORIZED

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a token is unknown, malformed, badly signed, or expired.

    For access tokens every failure collapses into this one kind; ``reason``
    keeps the precise cause for logging.
    """

    code = ErrorCode.INVALID_TOKEN

    def __init__(
        self,
        message: str = "Invalid token",
        reason: TokenFailureReason | None = None,
    ):
        self.reason = reason
        super().__init__(message)


class TokenExpiredError(AuthError):
    """Raised when a refresh token is past its expiry."""

    code = ErrorCode.TOKEN_EXPIRED

    def __init__(self, message: str = "Refresh token expired"):
        super().__init__(message)


class TokenRevokedError(AuthError):
    """Raised when a refresh token has already been revoked or redeemed."""

    code = ErrorCode.TOKEN_REVOKED

    def __init__(self, message: str = "Refresh token revoked"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login."""

    code = ErrorCode.INVALID_CREDENTIALS

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class UnauthorizedError(AuthError):
    """Raised when a protected operation is attempted without credentials."""

    code = ErrorCode.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    code = ErrorCode.WEAK_PASSWORD

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InternalAuthError(Exception):
    """Base exception for infrastructure failures inside the auth core."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str = "Internal authentication error"):
        self.message = message
        super().__init__(self.message)


class PasswordHashingError(InternalAuthError):
    """Raised when bcrypt fails or a stored hash is malformed."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message)


class KeyMaterialError(InternalAuthError):
    """Raised when signing keys are missing, malformed, or mismatched."""

    def __init__(self, message: str = "Invalid signing key material"):
        super().__init__(message)

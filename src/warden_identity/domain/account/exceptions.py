"""Account domain exceptions.

Both are part of the caller-visible authentication error taxonomy, so they
extend ``AuthError`` and carry a stable error code.
"""

from uuid import UUID

from warden_auth.exceptions import AuthError, ErrorCode


class AccountAlreadyExistsError(AuthError):
    """Email already registered."""

    code = ErrorCode.ACCOUNT_ALREADY_EXISTS

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class AccountNotFoundError(AuthError):
    """Account not found (or soft-deleted)."""

    code = ErrorCode.ACCOUNT_NOT_FOUND

    def __init__(self, account_id: UUID | str) -> None:
        self.account_id = str(account_id)
        super().__init__(f"Account not found: {account_id}")

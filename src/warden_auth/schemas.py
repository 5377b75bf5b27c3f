"""Auth schemas and data structures.

These are simple data classes used for transferring token
data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class AccessTokenClaims:
    """Verified claims of an access token.

    Attributes
    ----------
    account_id
        The unique identifier of the account
    email
        The account's email address
    issuer
        The ``iss`` claim
    subject
        The ``sub`` claim (the account id as a string)
    issued_at
        The ``iat`` claim
    not_before
        The ``nbf`` claim
    expires_at
        The ``exp`` claim
    """

    account_id: UUID
    email: str
    issuer: str
    subject: str
    issued_at: datetime
    not_before: datetime
    expires_at: datetime


@dataclass(frozen=True)
class IssuedRefreshToken:
    """A freshly generated refresh token, not yet persisted."""

    token: str
    expires_at: datetime

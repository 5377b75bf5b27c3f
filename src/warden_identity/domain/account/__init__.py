"""Account domain manages account identity and credentials.

This domain handles:
- Account aggregate (id, email, name, password hash)
- Account lookup and soft deletion
"""

from warden_identity.domain.account.aggregates import Account
from warden_identity.domain.account.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
)
from warden_identity.domain.account.repositories import AccountRepository

__all__ = [
    "Account",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "AccountRepository",
]

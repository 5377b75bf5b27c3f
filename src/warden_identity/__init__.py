"""Warden Identity - Accounts and sessions.

This module handles all identity-related concerns:
- Account management (create, lookup, soft delete)
- Authentication (register, login)
- Sessions (refresh-token rotation, logout, logout everywhere)

Token and password mechanics come from warden_auth; this package wires
them to the Account aggregate.
"""

from warden_identity.application.services import AuthenticationService, AuthResult
from warden_identity.domain.account import (
    Account,
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AccountRepository,
)

__all__ = [
    # Domain - Account
    "Account",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "AccountRepository",
    # Application Services
    "AuthenticationService",
    "AuthResult",
]

"""Abstract repository interface for refresh tokens.

This interface defines the contract for refresh-token persistence.
Implementations can use SQLAlchemy, MongoDB, or any other storage.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class RefreshTokenData:
    """Immutable refresh-token record returned by the repository.

    Validity is derived from the record and a caller-supplied clock so the
    rule stays a pure function of its inputs.
    """

    id: int
    account_id: UUID
    token: str
    expires_at: datetime
    is_revoked: bool
    created_at: datetime
    updated_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def is_valid(self, now: datetime) -> bool:
        return not self.is_revoked and not self.is_expired(now)


class RefreshTokenRepository(ABC):
    """
    Abstract repository interface for opaque refresh tokens.

    Records only ever move from active to revoked; nothing un-revokes a
    token. Implementations flush but never commit, the caller owns the
    transaction.
    """

    @abstractmethod
    async def create(
        self,
        account_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> RefreshTokenData:
        """
        Persist a newly issued refresh token.

        Parameters
        ----------
        account_id
            Owner of the token
        token
            The opaque token string
        expires_at
            Absolute expiry (UTC)

        Returns
        -------
        The stored record
        """

    @abstractmethod
    async def find_by_token(self, token: str) -> RefreshTokenData | None:
        """
        Find a record by its token string.

        Revoked and expired records are returned as well; deciding whether
        the token is still usable is up to the caller.

        Returns
        -------
        The record if found, None otherwise
        """

    @abstractmethod
    async def find_by_account_id(self, account_id: UUID) -> list[RefreshTokenData]:
        """List the non-revoked records of an account."""

    @abstractmethod
    async def revoke(self, token: str) -> bool:
        """
        Revoke a single token if it is still active.

        Implementations must make this a conditional update so that, among
        concurrent callers presenting the same token, exactly one gets True.

        Returns
        -------
        True if this call revoked the token, False if it was unknown or
        already revoked
        """

    @abstractmethod
    async def revoke_all_by_account_id(self, account_id: UUID) -> int:
        """
        Revoke every active token of an account.

        Returns
        -------
        Number of records revoked
        """

    @abstractmethod
    async def delete_expired(self) -> int:
        """
        Remove records past their expiry.

        Returns
        -------
        Number of records deleted
        """

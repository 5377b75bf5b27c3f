"""Account repository interface."""

from abc import ABC, abstractmethod
from uuid import UUID

from warden_identity.domain.account.aggregates.account import Account


class AccountRepository(ABC):
    """Repository interface for Account aggregates.

    Finders never return soft-deleted accounts.
    """

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Insert a new account.

        Raises ``AccountAlreadyExistsError`` if the email is taken.
        """

    @abstractmethod
    async def find_by_id(self, account_id: UUID) -> Account | None:
        """Find an account by its ID."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Account | None:
        """Find an account by its exact email address."""

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Persist changes to an existing account.

        Raises ``AccountNotFoundError`` if it does not exist.
        """

    @abstractmethod
    async def delete(self, account_id: UUID) -> bool:
        """Soft-delete an account. Returns False if there was nothing to delete."""

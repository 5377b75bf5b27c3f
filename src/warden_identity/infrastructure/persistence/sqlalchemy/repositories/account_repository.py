"""SQLAlchemy implementation of AccountRepository."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden.domain.shared.time import ensure_tz_aware, utc_now
from warden_identity.domain.account import (
    Account,
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AccountRepository,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models import AccountModel

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, account: Account) -> Account:
        model = self._map_to_model(account)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise AccountAlreadyExistsError(account.email) from e
            raise
        logger.info("Created account: %s (email: %s)", account.id, account.email)
        return self._map_to_domain(model)

    async def find_by_id(self, account_id: UUID) -> Account | None:
        model = await self._find_model_by_id(account_id)
        return self._map_to_domain(model) if model else None

    async def find_by_email(self, email: str) -> Account | None:
        stmt = select(AccountModel).where(
            AccountModel.email == email,
            AccountModel.deleted_at.is_(None),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def update(self, account: Account) -> Account:
        model = await self._find_model_by_id(account.id)
        if model is None:
            raise AccountNotFoundError(account.id)

        model.email = account.email
        model.name = account.name
        model.password_hash = account.password_hash
        model.updated_at = account.updated_at
        await self._session.flush()
        logger.debug("Updated account: %s", account.id)
        return self._map_to_domain(model)

    async def delete(self, account_id: UUID) -> bool:
        model = await self._find_model_by_id(account_id)
        if model is None:
            return False

        now = utc_now()
        model.deleted_at = now
        model.updated_at = now
        await self._session.flush()
        logger.info("Soft-deleted account: %s", account_id)
        return True

    async def _find_model_by_id(self, account_id: UUID) -> AccountModel | None:
        stmt = select(AccountModel).where(
            AccountModel.id == account_id,
            AccountModel.deleted_at.is_(None),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: AccountModel) -> Account:
        return Account.reconstitute(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            name=model.name,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
            deleted_at=ensure_tz_aware(model.deleted_at) if model.deleted_at else None,
        )

    def _map_to_model(self, account: Account) -> AccountModel:
        return AccountModel(
            id=account.id,
            email=account.email,
            password_hash=account.password_hash,
            name=account.name,
            created_at=account.created_at,
            updated_at=account.updated_at,
            deleted_at=account.deleted_at,
        )

"""SQLAlchemy implementation of RefreshTokenRepository."""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from warden.domain.shared.time import ensure_tz_aware, utc_now
from warden_auth.persistence.sqlalchemy.models import RefreshTokenModel
from warden_auth.repositories import RefreshTokenData, RefreshTokenRepository

logger = logging.getLogger(__name__)


class RefreshTokenRepositorySQLAlchemy(RefreshTokenRepository):
    """
    SQLAlchemy implementation of RefreshTokenRepository.

    Revocation is issued as ``UPDATE ... WHERE is_revoked = false`` and the
    affected row count decides the outcome, so two sessions redeeming the
    same token cannot both succeed.
    """

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Parameters
        ----------
        session
            SQLAlchemy async session
        """
        self._session = session

    def _to_data(self, model: RefreshTokenModel) -> RefreshTokenData:
        """Map SQLAlchemy model to data transfer object."""
        return RefreshTokenData(
            id=model.id,
            account_id=UUID(model.account_id),
            token=model.token,
            expires_at=ensure_tz_aware(model.expires_at),
            is_revoked=model.is_revoked,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    async def create(
        self,
        account_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> RefreshTokenData:
        model = RefreshTokenModel(
            account_id=str(account_id),
            token=token,
            expires_at=expires_at,
            is_revoked=False,
        )
        self._session.add(model)
        await self._session.flush()
        logger.debug("Stored refresh token %d for account %s", model.id, account_id)
        return self._to_data(model)

    async def find_by_token(self, token: str) -> RefreshTokenData | None:
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.token == token)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_data(model) if model else None

    async def find_by_account_id(self, account_id: UUID) -> list[RefreshTokenData]:
        stmt = (
            select(RefreshTokenModel)
            .where(
                RefreshTokenModel.account_id == str(account_id),
                RefreshTokenModel.is_revoked.is_(False),
            )
            .order_by(RefreshTokenModel.id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [self._to_data(m) for m in result.scalars().all()]

    async def revoke(self, token: str) -> bool:
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.token == token,
                RefreshTokenModel.is_revoked.is_(False),
            )
            .values(is_revoked=True, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount == 1  # type: ignore

    async def revoke_all_by_account_id(self, account_id: UUID) -> int:
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.account_id == str(account_id),
                RefreshTokenModel.is_revoked.is_(False),
            )
            .values(is_revoked=True, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        revoked = result.rowcount  # type: ignore
        logger.info("Revoked %d refresh tokens for account %s", revoked, account_id)
        return revoked

    async def delete_expired(self) -> int:
        stmt = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.expires_at < utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount  # type: ignore

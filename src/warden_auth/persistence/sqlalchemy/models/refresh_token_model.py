"""SQLAlchemy model for refresh tokens."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from warden.infrastructure.persistence.sqlalchemy.models.base import TimestampMixin
from warden_auth.persistence.sqlalchemy.base import AuthBase


class RefreshTokenModel(AuthBase, TimestampMixin):
    """
    SQLAlchemy model for opaque refresh tokens.

    Table: refresh_tokens
    """

    __tablename__ = "refresh_tokens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # No FK to stay decoupled from the accounts table
    account_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
    )

    # 32 random bytes, hex encoded
    token: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    is_revoked: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<RefreshTokenModel(id={self.id}, account_id={self.account_id}, "
            f"is_revoked={self.is_revoked})>"
        )

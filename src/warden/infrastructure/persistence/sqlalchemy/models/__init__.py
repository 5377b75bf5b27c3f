"""Shared SQLAlchemy model base."""

from warden.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

__all__ = ["Base", "TimestampMixin"]

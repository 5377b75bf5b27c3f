"""SQLAlchemy implementation for warden_auth persistence.

Provides:
- AuthBase: Declarative base for auth models
- RefreshTokenModel: SQLAlchemy model for refresh tokens
- RefreshTokenRepositorySQLAlchemy: Repository implementation

Note: AuthBase.metadata has to be created alongside the application's own
metadata (see warden.infrastructure.persistence.sqlalchemy.init_db).
"""

from warden_auth.persistence.sqlalchemy.base import AuthBase
from warden_auth.persistence.sqlalchemy.models import RefreshTokenModel
from warden_auth.persistence.sqlalchemy.repositories import (
    RefreshTokenRepositorySQLAlchemy,
)

__all__ = [
    "AuthBase",
    "RefreshTokenModel",
    "RefreshTokenRepositorySQLAlchemy",
]

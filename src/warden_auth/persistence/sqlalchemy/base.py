"""SQLAlchemy declarative base for warden_auth models.

Auth tables live on their own base so the package stays usable without the
account tables. Create both metadatas when initializing a database.
"""

from sqlalchemy.orm import DeclarativeBase


class AuthBase(DeclarativeBase):
    """Declarative base for warden_auth models."""

"""SQLAlchemy declarative base for warden_identity models.

Uses the same metadata as warden's Base so account tables are created
together with the application's own tables.
"""

from warden.infrastructure.persistence.sqlalchemy.models.base import Base

IdentityBase = Base

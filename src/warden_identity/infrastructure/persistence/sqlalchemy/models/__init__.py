from warden_identity.infrastructure.persistence.sqlalchemy.models.account_model import (
    AccountModel,
)

__all__ = ["AccountModel"]

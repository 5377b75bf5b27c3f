from warden_auth.persistence.sqlalchemy.repositories.refresh_token_repository import (
    RefreshTokenRepositorySQLAlchemy,
)

__all__ = ["RefreshTokenRepositorySQLAlchemy"]

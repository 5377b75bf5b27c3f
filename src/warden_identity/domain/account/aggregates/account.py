"""Account aggregate."""

from datetime import datetime
from uuid import UUID, uuid4

from warden.domain.shared.time import utc_now


class Account:
    """
    Account aggregate root.

    Holds identity and the current password hash. Emails are compared
    exactly as stored; no case folding is applied.
    """

    def __init__(
        self,
        email: str,
        password_hash: str,
        name: str,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        if not email:
            msg = "Account email cannot be empty"
            raise ValueError(msg)
        self._id = id or uuid4()
        self._email = email
        self._password_hash = password_hash
        self._name = name
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()
        self._deleted_at = deleted_at

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def name(self) -> str:
        return self._name

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def deleted_at(self) -> datetime | None:
        return self._deleted_at

    @property
    def is_deleted(self) -> bool:
        return self._deleted_at is not None

    def rename(self, name: str) -> None:
        self._name = name
        self._updated_at = utc_now()

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._updated_at = utc_now()

    @classmethod
    def create(cls, email: str, password_hash: str, name: str) -> "Account":
        return cls(email=email, password_hash=password_hash, name=name)

    @classmethod
    def reconstitute(
        cls,
        id: UUID,
        email: str,
        password_hash: str,
        name: str,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: datetime | None = None,
    ) -> "Account":
        return cls(
            id=id,
            email=email,
            password_hash=password_hash,
            name=name,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Account(id={self._id}, email={self._email})"

"""User aggregate for account lifecycle."""

from datetime import datetime
from typing import Union

from userhub.domain.shared.time import utc_now
from userhub.domain.user.value_objects import Email, UserRole


class User:
    """
    User aggregate root.

    Holds the account identity, the credential hash and the soft-delete
    marker. The identifier is assigned by the repository on insert and is
    ``None`` until then.
    """

    def __init__(
        self,
        email: Union[str, Email],
        password_hash: str,
        role: Union[str, UserRole] = UserRole.USER,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        if not password_hash:
            msg = "Password hash cannot be empty"
            raise ValueError(msg)

        self._email = email if isinstance(email, Email) else Email(email)
        self._password_hash = password_hash
        self._role = UserRole.parse(role)
        self._id = id
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at
        self._deleted_at = deleted_at

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

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

    def change_email(self, email: Union[str, Email]) -> None:
        self._email = email if isinstance(email, Email) else Email(email)
        self._updated_at = utc_now()

    def change_password_hash(self, password_hash: str) -> None:
        if not password_hash:
            msg = "Password hash cannot be empty"
            raise ValueError(msg)
        self._password_hash = password_hash
        self._updated_at = utc_now()

    def change_role(self, role: Union[str, UserRole]) -> None:
        self._role = UserRole.parse(role)
        self._updated_at = utc_now()

    def mark_deleted(self, at: datetime | None = None) -> None:
        self._deleted_at = at or utc_now()
        self._updated_at = utc_now()

    def mark_restored(self) -> None:
        self._deleted_at = None
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        password_hash: str,
        role: Union[str, UserRole] = UserRole.USER,
    ) -> "User":
        return cls(email=email, password_hash=password_hash, role=role)

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: int,
        email: Union[str, Email],
        password_hash: str,
        role: Union[str, UserRole],
        created_at: datetime,
        updated_at: datetime,
        deleted_at: datetime | None = None,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value}, role={self._role.value})"

"""DTOs for user accounts."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from userhub.domain.user import User, UserRole


@dataclass(frozen=True)
class UserDTO:
    """Public projection of a user; never carries the credential hash."""

    id: int
    email: str
    role: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserDTO":
        if user.id is None:
            msg = "Cannot project a user that has not been persisted"
            raise ValueError(msg)
        return cls(
            id=user.id,
            email=user.email,
            role=user.role.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True)
class UserUpdate:
    """Partial update of a user; ``None`` means "leave unchanged"."""

    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Union[str, UserRole]] = None

    def is_empty(self) -> bool:
        return self.email is None and self.password is None and self.role is None

"""User role value object."""

from enum import Enum
from typing import Union

from userhub.domain.user.exceptions import InvalidRoleError


class UserRole(str, Enum):
    """Role assigned to a user account."""

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: Union[str, "UserRole"]) -> "UserRole":
        """Convert a raw value into a role, raising InvalidRoleError if unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidRoleError(value)
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            raise InvalidRoleError(value) from e

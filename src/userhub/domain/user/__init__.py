"""User domain - accounts, credentials and lifecycle state."""

from userhub.domain.user.aggregates import User
from userhub.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidRoleError,
    UserNotDeletedError,
    UserNotFoundError,
    UserStateInconsistencyError,
    WeakPasswordError,
)
from userhub.domain.user.repositories import DuplicateRecordError, UserRepository
from userhub.domain.user.value_objects import Email, UserRole

__all__ = [
    "DuplicateRecordError",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "InvalidRoleError",
    "User",
    "UserNotDeletedError",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "UserStateInconsistencyError",
    "WeakPasswordError",
]

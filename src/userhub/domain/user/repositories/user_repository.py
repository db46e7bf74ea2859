"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from userhub.domain.user.aggregates.user import User
from userhub.domain.user.value_objects.email import Email


class DuplicateRecordError(Exception):  # NOQA: N818
    """Storage rejected a write because a unique field is already taken.

    Raised by repository implementations, never by the domain itself.
    Callers translate it into the matching domain conflict.
    """

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Duplicate value for {field}: {value}")


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Lookups use the active view (soft-deleted users hidden) unless
    ``include_deleted`` is passed.
    """

    @abstractmethod
    async def find_by_id(
        self,
        user_id: int,
        include_deleted: bool = False,
    ) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find an active user by their email address."""

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List active users in insertion order."""

    @abstractmethod
    async def insert(self, user: User) -> User:
        """Persist a new user and return it with its assigned ID.

        Raises
        ------
        DuplicateRecordError
            If an active user already holds the email
        """

    @abstractmethod
    async def save(self, user: User) -> User:
        """Update an existing user in place.

        Raises
        ------
        DuplicateRecordError
            If the new email is held by another active user
        """

    @abstractmethod
    async def hard_delete(self, user_id: int) -> None:
        """Permanently remove a user."""

    @abstractmethod
    async def soft_delete(self, user_id: int) -> None:
        """Mark a user as deleted."""

    @abstractmethod
    async def restore(self, user_id: int) -> None:
        """Clear the deletion marker of a user.

        Raises
        ------
        DuplicateRecordError
            If an active user already holds the email
        """

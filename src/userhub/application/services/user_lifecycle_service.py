"""Account lifecycle service: create, read, update, delete, soft-delete, restore."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

from userhub.application.dtos import UserDTO, UserUpdate
from userhub.domain.user import (
    DuplicateRecordError,
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    User,
    UserNotDeletedError,
    UserNotFoundError,
    UserRole,
    UserStateInconsistencyError,
)

if TYPE_CHECKING:
    from userhub.domain.user import UserRepository
    from userhub.services import PasswordHashingService

logger = logging.getLogger(__name__)


class UserLifecycleService:
    """
    Application service owning every user account state transition.

    Enforces email uniqueness over active users, hashes credentials
    before they reach the repository and drives the
    active -> soft-deleted -> active cycle. Projections returned to
    callers never include the password hash; only ``find_by_email``
    hands out the raw aggregate for credential checks.

    Every input is validated before the first write, so a rejected
    call leaves the stored user untouched.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service

    async def create(
        self,
        email: str,
        password: str,
        role: Optional[Union[str, UserRole]] = None,
    ) -> UserDTO:
        email_obj = Email(email)
        user_role = UserRole.USER if role is None else UserRole.parse(role)

        existing = await self._user_repo.find_by_email(email_obj)
        if existing is not None:
            raise EmailAlreadyExistsError(email_obj.value)

        self._password_service.validate_strength(password)

        password_hash = self._password_service.hash(password)
        user = User.create(email_obj, password_hash, role=user_role)

        try:
            saved = await self._user_repo.insert(user)
        except DuplicateRecordError as e:
            raise EmailAlreadyExistsError(email_obj.value) from e

        logger.info(
            "User created: %s (id=%s, role=%s)",
            saved.email,
            saved.id,
            saved.role.value,
        )
        return UserDTO.from_user(saved)

    async def get(self, user_id: int) -> UserDTO:
        user = await self._require_active(user_id)
        return UserDTO.from_user(user)

    async def list(self) -> list[UserDTO]:
        users = await self._user_repo.list_all()
        return [UserDTO.from_user(user) for user in users]

    async def find_by_email(self, email: str) -> Optional[User]:
        """Return the active user holding ``email``, including its hash.

        Intended for credential verification. Malformed addresses cannot
        belong to any user and yield ``None``.
        """
        try:
            email_obj = Email(email)
        except InvalidEmailError:
            return None
        return await self._user_repo.find_by_email(email_obj)

    async def update(self, user_id: int, changes: UserUpdate) -> UserDTO:
        user = await self._require_active(user_id)

        new_email = Email(changes.email) if changes.email is not None else None
        new_role = UserRole.parse(changes.role) if changes.role is not None else None
        if changes.password is not None:
            self._password_service.validate_strength(changes.password)

        if new_email is not None and new_email.value != user.email:
            holder = await self._user_repo.find_by_email(new_email)
            if holder is not None and holder.id != user.id:
                raise EmailAlreadyExistsError(new_email.value)
            user.change_email(new_email)

        if changes.password is not None:
            user.change_password_hash(self._password_service.hash(changes.password))

        if new_role is not None:
            user.change_role(new_role)

        try:
            saved = await self._user_repo.save(user)
        except DuplicateRecordError as e:
            raise EmailAlreadyExistsError(user.email) from e

        logger.info("User updated: %s", user_id)
        return UserDTO.from_user(saved)

    async def remove(self, user_id: int) -> None:
        await self._require_active(user_id)
        await self._user_repo.hard_delete(user_id)
        logger.info("User permanently deleted: %s", user_id)

    async def soft_delete(self, user_id: int) -> str:
        await self._require_active(user_id)
        await self._user_repo.soft_delete(user_id)
        logger.info("User soft deleted: %s", user_id)
        return f"User with ID {user_id} has been soft deleted"

    async def restore(self, user_id: int) -> UserDTO:
        user = await self._user_repo.find_by_id(user_id, include_deleted=True)
        if user is None:
            raise UserNotFoundError(user_id)
        if not user.is_deleted:
            raise UserNotDeletedError(user_id)

        # Email may have been reused while this user was soft-deleted
        holder = await self._user_repo.find_by_email(user.email_obj)
        if holder is not None and holder.id != user.id:
            raise EmailAlreadyExistsError(user.email)

        try:
            await self._user_repo.restore(user_id)
        except DuplicateRecordError as e:
            raise EmailAlreadyExistsError(user.email) from e

        restored = await self._user_repo.find_by_id(user_id)
        if restored is None:
            logger.error("User %s is not visible after restore", user_id)
            raise UserStateInconsistencyError(user_id)

        logger.info("User restored: %s", user_id)
        return UserDTO.from_user(restored)

    async def _require_active(self, user_id: int) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

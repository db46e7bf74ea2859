"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.domain.shared.time import ensure_tz_aware
from userhub.domain.user import (
    DuplicateRecordError,
    Email,
    User,
    UserNotFoundError,
    UserRepository,
)
from userhub.infrastructure.persistence.sqlalchemy.models import UserModel
from userhub.infrastructure.persistence.sqlalchemy.models.user_model import (
    ACTIVE_EMAIL_INDEX,
)

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Writes are flushed, never committed; the caller owns the transaction.
    After a DuplicateRecordError the session must be rolled back.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(
        self,
        user_id: int,
        include_deleted: bool = False,
    ) -> User | None:
        model = await self._find_model_by_id(user_id, include_deleted=include_deleted)

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> User | None:
        email_value = email.value if isinstance(email, Email) else Email(email).value

        stmt = select(UserModel).where(
            UserModel.email == email_value,
            UserModel.deleted_at.is_(None),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def list_all(self) -> list[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.deleted_at.is_(None))
            .order_by(UserModel.id)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    async def insert(self, user: User) -> User:
        model = self._map_to_model(user)
        self._session.add(model)

        await self._flush(user.email)

        logger.debug("Inserted user: %s", model.id)
        return self._map_to_domain(model)

    async def save(self, user: User) -> User:
        if user.id is None:
            msg = "Cannot save a user without an ID; use insert()"
            raise ValueError(msg)

        model = await self._find_model_by_id(user.id, include_deleted=True)
        if model is None:
            raise UserNotFoundError(user.id)

        self._update_model(model, user)
        await self._flush(user.email)

        logger.debug("Updated user: %s", user.id)
        return self._map_to_domain(model)

    async def hard_delete(self, user_id: int) -> None:
        model = await self._find_model_by_id(user_id, include_deleted=True)

        if model:
            await self._session.delete(model)
            await self._session.flush()
            logger.debug("Deleted user: %s", user_id)

    async def soft_delete(self, user_id: int) -> None:
        model = await self._find_model_by_id(user_id)

        if model:
            user = self._map_to_domain(model)
            user.mark_deleted()
            self._update_model(model, user)
            await self._session.flush()
            logger.debug("Soft deleted user: %s", user_id)

    async def restore(self, user_id: int) -> None:
        model = await self._find_model_by_id(user_id, include_deleted=True)

        if model and model.deleted_at is not None:
            user = self._map_to_domain(model)
            user.mark_restored()
            self._update_model(model, user)
            await self._flush(user.email)
            logger.debug("Restored user: %s", user_id)

    async def _flush(self, email: str) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            if self._is_email_conflict(e):
                raise DuplicateRecordError("email", email) from e
            raise

    @staticmethod
    def _is_email_conflict(error: IntegrityError) -> bool:
        # PostgreSQL reports the index name, SQLite the indexed column
        message = str(error.orig)
        return ACTIVE_EMAIL_INDEX in message or "users.email" in message

    async def _find_model_by_id(
        self,
        user_id: int,
        include_deleted: bool = False,
    ) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        if not include_deleted:
            stmt = stmt.where(UserModel.deleted_at.is_(None))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            role=model.role,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
            deleted_at=ensure_tz_aware(model.deleted_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
            deleted_at=user.deleted_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.email = user.email
        model.password_hash = user.password_hash
        model.role = user.role.value
        model.updated_at = user.updated_at
        model.deleted_at = user.deleted_at

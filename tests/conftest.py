"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/           # Fast, isolated tests (mocks, in-memory repository)
    └── integration/    # SQLAlchemy against in-memory SQLite, CLI end to end

Loads config/.env.test when present so local overrides apply to tests.
"""

from pathlib import Path
from typing import Optional, Union

import pytest
from dotenv import load_dotenv

from userhub.domain.user import (
    DuplicateRecordError,
    Email,
    User,
    UserNotFoundError,
    UserRepository,
)
from userhub_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if (PROJECT_ROOT / "config" / ".env.test").exists():
    load_dotenv(PROJECT_ROOT / "config" / ".env.test")


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Every test sees settings built from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()


class InMemoryUserRepository(UserRepository):
    """Dict-backed repository with the same active-email uniqueness as the SQL index.

    Returns copies so callers can't mutate stored state without save().
    """

    def __init__(self) -> None:
        self._rows: dict[int, User] = {}
        self._next_id = 1

    @staticmethod
    def _copy(user: User, user_id: Optional[int] = None) -> User:
        return User.reconstitute(
            id=user_id if user_id is not None else user.id,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
            deleted_at=user.deleted_at,
        )

    def _check_unique(self, email: str, ignore_id: Optional[int] = None) -> None:
        for row in self._rows.values():
            if row.id != ignore_id and not row.is_deleted and row.email == email:
                raise DuplicateRecordError("email", email)

    async def find_by_id(
        self,
        user_id: int,
        include_deleted: bool = False,
    ) -> Optional[User]:
        row = self._rows.get(user_id)
        if row is None or (row.is_deleted and not include_deleted):
            return None
        return self._copy(row)

    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        value = email.value if isinstance(email, Email) else Email(email).value
        for row in self._rows.values():
            if row.email == value and not row.is_deleted:
                return self._copy(row)
        return None

    async def list_all(self) -> list[User]:
        return [self._copy(row) for row in self._rows.values() if not row.is_deleted]

    async def insert(self, user: User) -> User:
        self._check_unique(user.email)
        stored = self._copy(user, user_id=self._next_id)
        self._rows[stored.id] = stored
        self._next_id += 1
        return self._copy(stored)

    async def save(self, user: User) -> User:
        if user.id not in self._rows:
            raise UserNotFoundError(user.id)
        if not user.is_deleted:
            self._check_unique(user.email, ignore_id=user.id)
        self._rows[user.id] = self._copy(user)
        return self._copy(user)

    async def hard_delete(self, user_id: int) -> None:
        self._rows.pop(user_id, None)

    async def soft_delete(self, user_id: int) -> None:
        row = self._rows.get(user_id)
        if row is not None and not row.is_deleted:
            row.mark_deleted()

    async def restore(self, user_id: int) -> None:
        row = self._rows.get(user_id)
        if row is not None and row.is_deleted:
            self._check_unique(row.email, ignore_id=user_id)
            row.mark_restored()


@pytest.fixture
def in_memory_user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()

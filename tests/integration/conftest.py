"""Fixtures for integration tests against in-memory SQLite."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from userhub.infrastructure.persistence.sqlalchemy.init_db import create_tables
from userhub.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)


@pytest.fixture
async def engine():
    """Create an in-memory SQLite engine with the schema in place."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session


@pytest.fixture
def user_repo(session):
    """Create UserRepository instance."""
    return UserRepositorySQLAlchemy(session)

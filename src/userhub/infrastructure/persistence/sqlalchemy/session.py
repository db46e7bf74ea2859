"""Async engine and session factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from userhub_config.settings import get_settings

if TYPE_CHECKING:
    from userhub_config.settings import Settings


def create_engine(settings: Settings | None = None) -> AsyncEngine:
    """Create an async engine for the configured database.

    The caller owns the engine and must ``dispose()`` it.
    """
    if settings is None:
        settings = get_settings()
    return create_async_engine(
        settings.database_url,
        echo=settings.db_echo,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

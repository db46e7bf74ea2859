"""Database initialization utilities."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

# Import models to register with Base.metadata
import userhub.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from userhub.infrastructure.persistence.sqlalchemy.models.base import Base

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables(engine: AsyncEngine) -> None:
    """
    Drop all database tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    logger.info("Database tables dropped successfully")

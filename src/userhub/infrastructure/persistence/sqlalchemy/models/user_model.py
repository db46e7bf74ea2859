"""SQLAlchemy model for User aggregate."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from userhub.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

ACTIVE_EMAIL_INDEX = "uq_users_email_active"


class UserModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting User aggregates.

    Email uniqueness is enforced by a partial index that only covers rows
    without a deletion marker, so soft-deleted rows keep their email
    without blocking new registrations.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index(
            ACTIVE_EMAIL_INDEX,
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default="user", nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<UserModel(id={self.id}, email={self.email}, role={self.role}, "
            f"deleted_at={self.deleted_at})>"
        )

"""Time helpers; all domain timestamps are timezone-aware UTC."""

from datetime import datetime, timezone
from typing import Optional, overload


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


@overload
def ensure_tz_aware(dt: datetime) -> datetime: ...


@overload
def ensure_tz_aware(dt: None) -> None: ...


def ensure_tz_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on round-trip)."""
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=timezone.utc)

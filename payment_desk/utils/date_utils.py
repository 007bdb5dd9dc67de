"""Date manipulation utilities"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on the way back)"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_timestamp(previous: datetime, now: Optional[datetime] = None) -> datetime:
    """Return `now`, bumped past `previous` by one microsecond if the clock has not moved"""
    now = ensure_utc(now or utcnow())
    previous = ensure_utc(previous)
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now

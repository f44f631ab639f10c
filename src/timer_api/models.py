from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, TypedDict


# PUBLIC_INTERFACE
class TimerEntity(TypedDict):
    """
    A lightweight domain model representing a stored Timer.

    Fields:
    - id: Opaque string identifier assigned by the store
    - title: Non-empty title (trimmed on input via schemas)
    - description: Optional detailed description
    - date: Target moment of the timer (aware, UTC)
    - created_at: UTC creation timestamp
    - updated_at: UTC last update timestamp

    The countdown ('remaining') is never part of the stored record.
    """

    id: str
    title: str
    description: Optional[str]
    date: datetime
    created_at: datetime
    updated_at: datetime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _epoch_ms(value: datetime) -> int:
    delta = as_utc(value) - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86_400 + delta.seconds) * 1_000 + delta.microseconds // 1_000


# PUBLIC_INTERFACE
def remaining_ms(date: datetime, now: Optional[datetime] = None) -> int:
    """
    Milliseconds from ``now`` (default: the current UTC time) until ``date``.

    Negative once ``date`` has passed.
    """
    return _epoch_ms(date) - _epoch_ms(now if now is not None else utcnow())

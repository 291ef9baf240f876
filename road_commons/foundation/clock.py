"""Clock utilities.

All instants in road-commons are epoch milliseconds (UTC).  This module is
the single source of "now" so tests can monkey-patch it trivially.
"""

from __future__ import annotations

from datetime import datetime, timezone

MS_PER_DAY = 24 * 60 * 60 * 1000


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def now_ms() -> int:
    """Return the current instant as integer epoch milliseconds."""
    return to_epoch_ms(utc_now())


def to_epoch_ms(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds, treating naive values as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def from_epoch_ms(ms: int | float) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)

"""
Timestamp helpers.

Stored timestamps are UTC truncated to whole milliseconds so that the
epoch-millisecond cursor handed to clients compares exactly against the
stored value.
"""

from datetime import datetime, timezone, timedelta
from typing import Optional

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_epoch_ms(value: datetime) -> int:
    return (as_utc(value) - _EPOCH) // timedelta(milliseconds=1)


def from_epoch_ms(ms: int) -> Optional[datetime]:
    """Convert epoch milliseconds to an aware UTC datetime, or None if out of range."""
    try:
        return _EPOCH + timedelta(milliseconds=ms)
    except OverflowError:
        return None

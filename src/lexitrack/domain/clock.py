"""
Time helpers shared by every layer.

All timestamps handled by lexitrack are timezone-aware UTC. Naive values
coming from callers are interpreted as UTC.
"""

from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_now(now: datetime | None) -> datetime:
    """Injected `now` wins; otherwise read the system clock."""
    return as_utc(now) if now is not None else utc_now()


def parse_timestamp(value: str | date | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp as stored by callers.

    Accepts a trailing 'Z', date-only strings, and already-parsed
    date/datetime objects (YAML loaders produce those).
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))


def days_between(later: datetime, earlier: datetime) -> float:
    """Fractional days from `earlier` to `later` (negative if reversed)."""
    return (as_utc(later) - as_utc(earlier)) / timedelta(days=1)

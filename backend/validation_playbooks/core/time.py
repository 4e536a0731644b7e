"""Time helpers shared across storage and API layers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta


def utcnow() -> datetime:
    """Return the current timezone-aware UTC timestamp."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with `utcnow()`."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def next_updated_at(previous: datetime) -> datetime:
    """Current time, nudged past `previous` when clocks disagree."""
    now = utcnow()
    floor = as_utc(previous) + timedelta(microseconds=1)
    return now if now >= floor else floor

"""Time window helpers used for 'today' queries."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime.

    SQLite hands back naive datetimes even for timezone-aware columns; those
    values were written as UTC, so they are tagged rather than converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def today_window_utc(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Return today's UTC window boundaries.

    Orders are stored with UTC timestamps, so all "today" filtering must use UTC
    boundaries as well.
    """
    current = ensure_utc(now) if now is not None else utcnow()
    start = current.replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=1)
    return start, end

"""
Datetime utilities for consistent timezone handling.

All datetime values stored by the system are timezone-aware UTC. Calendar
concepts (a day, a week, a month) are evaluated in the caller's zone and
converted to UTC ranges here, so the query layer only ever sees UTC.
"""

from datetime import UTC, date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

END_OF_DAY = time(23, 59, 59, 999999)


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of datetime.now() or datetime.utcnow().

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries (SQLite test engines return
    naive values).
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def from_timestamp_utc(timestamp: float) -> datetime:
    """Create a UTC-aware datetime from a Unix timestamp (JWT exp, iat)."""
    return datetime.fromtimestamp(timestamp, tz=UTC)


def resolve_zone(name: str | None, default: str = "UTC") -> ZoneInfo:
    """Return the ZoneInfo for name, falling back to default when unknown or empty."""
    if name:
        try:
            return ZoneInfo(name.strip())
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return ZoneInfo(default)


def local_day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """
    Return the inclusive UTC range covering one calendar day in tz.

    The range runs from 00:00:00.000000 to 23:59:59.999999 local time, so a
    row created at D 23:59:59.999 local is inside and D+1 00:00:00.000 is not.
    """
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, END_OF_DAY, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


def local_range_bounds(first: date, last: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the inclusive UTC range from the start of first to the end of last (local)."""
    start, _ = local_day_bounds(first, tz)
    _, end = local_day_bounds(last, tz)
    return start, end


def friday_week(today: date) -> tuple[date, date]:
    """Return (Friday, Thursday) of the Friday-to-Thursday week containing today."""
    # weekday(): Monday=0 ... Friday=4
    start = today - timedelta(days=(today.weekday() - 4) % 7)
    return start, start + timedelta(days=6)


def iso_week(today: date) -> tuple[date, date]:
    """Return (Monday, Sunday) of the ISO week containing today."""
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def calendar_month(today: date) -> tuple[date, date]:
    """Return the first and last day of today's month."""
    first = today.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return first, next_first - timedelta(days=1)

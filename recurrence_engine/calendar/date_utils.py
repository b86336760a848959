"""Calendar date helpers shared by the rule parser and the generator.

All rule arithmetic runs on timezone-aware datetimes pinned to noon UTC so
that stepping by days or months never lands on a daylight-saving boundary.
Only the calendar date of any result is meaningful.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Union

from dateutil.relativedelta import relativedelta

UTC = timezone.utc

# Fixed time-of-day every occurrence is generated at
ANCHOR_TIME = time(12, 0, 0, tzinfo=UTC)

DateLike = Union[date, str]


def coerce_date(value: DateLike) -> date:
    """Return a ``date`` for a ``date``, ``datetime`` or ``YYYY-MM-DD`` string.

    Args:
        value: Calendar date in any accepted form

    Returns:
        The calendar date

    Raises:
        ValueError: If a string is not an ISO calendar date
        TypeError: If the value is neither a date nor a string
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Expected date or ISO date string, got {type(value).__name__}")


def at_anchor_time(day: date) -> datetime:
    """Pin a calendar date to noon UTC."""
    return datetime.combine(day, ANCHOR_TIME)


def start_of_day(day: date) -> datetime:
    """Return 00:00:00 UTC on ``day``."""
    return datetime.combine(day, time(0, 0, 0, tzinfo=UTC))


def end_of_day(day: date) -> datetime:
    """Return 23:59:59 UTC on ``day``."""
    return datetime.combine(day, time(23, 59, 59, tzinfo=UTC))


def to_utc_date(dt: datetime) -> date:
    """Calendar date of ``dt`` in UTC (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        return dt.date()
    return dt.astimezone(UTC).date()


def format_compact(day: date) -> str:
    """Format a date as ``YYYYMMDD`` for rule strings."""
    return day.strftime("%Y%m%d")


def add_years(day: date, years: int) -> date:
    """Add calendar years; Feb 29 falls back to Feb 28 in non-leap years."""
    return day + relativedelta(years=years)


def previous_day(day: date) -> date:
    return day - timedelta(days=1)


def format_long(day: date) -> str:
    """Format as e.g. ``March 5, 2024`` without platform-specific strftime flags."""
    return f"{day.strftime('%B')} {day.day}, {day.year}"

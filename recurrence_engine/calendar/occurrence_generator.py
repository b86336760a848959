"""Occurrence generation for recurring events.

Expands a stored rule string plus its anchor date into the concrete
calendar dates that fall inside a query window.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from . import rrule_backend
from .date_utils import DateLike, coerce_date, end_of_day, start_of_day
from .rrule_parser import parse_rule

logger = logging.getLogger(__name__)

DEFAULT_UPCOMING_LIMIT = 5
DEFAULT_UPCOMING_HORIZON_DAYS = 365


def expand(
    rule: str,
    anchor_date: DateLike,
    window_start: DateLike,
    window_end: DateLike,
) -> list[date]:
    """Expand a rule into occurrence dates inside an inclusive window.

    Args:
        rule: Stored rule string
        anchor_date: First occurrence of the series
        window_start: First calendar date of the window (inclusive)
        window_end: Last calendar date of the window (inclusive)

    Returns:
        Ascending, duplicate-free list of dates

    Raises:
        RRuleParseError: If the rule string is malformed
    """
    parsed = parse_rule(rule)
    anchor = coerce_date(anchor_date)
    start = coerce_date(window_start)
    end = coerce_date(window_end)

    if end < start:
        logger.debug("Empty expansion window %s..%s for rule %r", start, end, rule)
        return []

    dates = rrule_backend.occurrences_between(parsed, anchor, start_of_day(start), end_of_day(end))
    logger.debug(
        "Expanded rule %r anchored %s over %s..%s: %d occurrences",
        rule,
        anchor,
        start,
        end,
        len(dates),
    )
    return dates


def next_occurrence(rule: str, anchor_date: DateLike, after_date: DateLike) -> Optional[date]:
    """Return the first occurrence on a calendar date strictly after ``after_date``.

    Returns None when the series ended on or before ``after_date``.

    Raises:
        RRuleParseError: If the rule string is malformed
    """
    parsed = parse_rule(rule)
    anchor = coerce_date(anchor_date)
    after = coerce_date(after_date)
    return rrule_backend.occurrence_after(parsed, anchor, end_of_day(after))


def upcoming_occurrences(
    rule: str,
    anchor_date: DateLike,
    from_date: DateLike,
    limit: int = DEFAULT_UPCOMING_LIMIT,
    horizon_days: int = DEFAULT_UPCOMING_HORIZON_DAYS,
) -> list[date]:
    """Next ``limit`` occurrences on or after ``from_date`` within ``horizon_days``.

    Used for the "upcoming dates" list on an event's detail view.
    """
    if limit <= 0:
        return []
    start = coerce_date(from_date)
    return expand(rule, anchor_date, start, start + timedelta(days=horizon_days))[:limit]

"""python-dateutil evaluation backend for parsed recurrence rules.

This is the only module that touches dateutil's rrule types. It answers
three questions about a rule anchored at a date: which occurrences fall
between two instants, which is the first after an instant, and what the
full (finite) occurrence list is. Results are always calendar dates.
"""

# ruff: noqa: I001
from datetime import date, datetime
import logging
from typing import Optional

from dateutil.rrule import MONTHLY, WEEKLY, rrule, weekday
from dateutil.rrule import FR, MO, SA, SU, TH, TU, WE

from ..exceptions import RRuleParseError
from .date_utils import at_anchor_time, to_utc_date
from .rrule_parser import ByDay, ParsedRule, until_as_datetime

logger = logging.getLogger(__name__)

_FREQUENCIES = {"WEEKLY": WEEKLY, "MONTHLY": MONTHLY}

_WEEKDAYS: dict[str, weekday] = {
    "SU": SU,
    "MO": MO,
    "TU": TU,
    "WE": WE,
    "TH": TH,
    "FR": FR,
    "SA": SA,
}


def _to_weekday(by_day: ByDay) -> weekday:
    base = _WEEKDAYS[by_day.day_code]
    return base(by_day.ordinal) if by_day.ordinal is not None else base


def build_rrule(parsed: ParsedRule, anchor: date) -> rrule:
    """Build a dateutil rrule with DTSTART at noon UTC on ``anchor``.

    Raises:
        RRuleParseError: If dateutil rejects the combination of parts
    """
    kwargs: dict = {
        "dtstart": at_anchor_time(anchor),
        "interval": parsed.interval,
    }
    if parsed.by_day:
        kwargs["byweekday"] = [_to_weekday(d) for d in parsed.by_day]
    if parsed.until is not None:
        kwargs["until"] = until_as_datetime(parsed)
    if parsed.count is not None:
        kwargs["count"] = parsed.count

    try:
        return rrule(_FREQUENCIES[parsed.freq], **kwargs)
    except (ValueError, TypeError, KeyError) as e:
        logger.debug("dateutil rejected %r anchored %s: %s", parsed, anchor, e)
        raise RRuleParseError(f"Rule cannot be evaluated: {e}", rule=parsed.to_string()) from e


def _unique_dates(instants: list[datetime]) -> list[date]:
    dates: list[date] = []
    for instant in instants:
        day = to_utc_date(instant)
        if not dates or dates[-1] != day:
            dates.append(day)
    return dates


def occurrences_between(
    parsed: ParsedRule, anchor: date, start: datetime, end: datetime
) -> list[date]:
    """Occurrence dates with start <= instant <= end, ascending."""
    rule = build_rrule(parsed, anchor)
    return _unique_dates(rule.between(start, end, inc=True))


def occurrence_after(parsed: ParsedRule, anchor: date, after: datetime) -> Optional[date]:
    """First occurrence strictly after ``after``, or None when the series is exhausted."""
    rule = build_rrule(parsed, anchor)
    nxt = rule.after(after, inc=False)
    return to_utc_date(nxt) if nxt is not None else None


def all_occurrences(parsed: ParsedRule, anchor: date) -> list[date]:
    """Every occurrence of a bounded rule.

    Raises:
        ValueError: If the rule has neither COUNT nor UNTIL
    """
    if parsed.is_open_ended:
        raise ValueError("Refusing to enumerate an open-ended rule")
    rule = build_rrule(parsed, anchor)
    return _unique_dates(list(rule))

"""Human-readable summaries of recurrence rules."""

from __future__ import annotations

import logging
from typing import Optional

from ..calendar.date_utils import DateLike, coerce_date, format_long
from ..calendar.day_ordinals import DAY_NAME_BY_CODE, ordinal_label
from ..calendar.rrule_parser import ByDay, ParsedRule, parse_rule

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "Custom recurrence"

_UNITS = {"WEEKLY": ("Weekly", "week"), "MONTHLY": ("Monthly", "month")}


def _join_words(words: list[str]) -> str:
    if len(words) <= 1:
        return "".join(words)
    return ", ".join(words[:-1]) + " and " + words[-1]


def _frequency_phrase(parsed: ParsedRule) -> str:
    adverb, unit = _UNITS[parsed.freq]
    if parsed.interval == 1:
        return adverb
    return f"Every {parsed.interval} {unit}s"


def _monthly_day(by_day: ByDay) -> str:
    name = DAY_NAME_BY_CODE[by_day.day_code]
    if by_day.ordinal is None:
        return f"every {name}"
    return f"the {ordinal_label(by_day.ordinal)} {name}"


def _day_phrase(parsed: ParsedRule, anchor_date: DateLike) -> str:
    if parsed.freq == "WEEKLY":
        if not parsed.by_day:
            return ""
        names = [DAY_NAME_BY_CODE[d.day_code] for d in parsed.by_day]
        return " on " + _join_words(names)

    if not parsed.by_day:
        # dateutil repeats on the anchor's day of month when BYDAY is absent
        return f" on day {coerce_date(anchor_date).day}"
    return " on " + _join_words([_monthly_day(d) for d in parsed.by_day])


def _end_phrase(parsed: ParsedRule) -> str:
    if parsed.until is not None:
        return f", until {format_long(parsed.until)}"
    if parsed.count is not None:
        return f", {parsed.count} time" + ("" if parsed.count == 1 else "s")
    return ""


def describe(rule: Optional[str], anchor_date: DateLike) -> str:
    """Describe a rule in one sentence, e.g. "Weekly on Tuesday, 10 times".

    Display-only: any failure yields "Custom recurrence" instead of raising.

    Args:
        rule: Stored rule string; empty for a non-recurring event
        anchor_date: Anchor date of the series

    Returns:
        Capitalized sentence, or "" when there is no rule
    """
    if not rule:
        return ""

    try:
        parsed = parse_rule(rule)
        text = _frequency_phrase(parsed) + _day_phrase(parsed, anchor_date) + _end_phrase(parsed)
    except Exception:
        logger.debug("Failed to describe rule %r", rule, exc_info=True)
        return FALLBACK_DESCRIPTION

    return text[:1].upper() + text[1:]

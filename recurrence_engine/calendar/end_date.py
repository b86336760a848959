"""Effective end date of a recurring series."""

import logging
from datetime import date
from typing import Optional

from ..exceptions import RRuleParseError
from . import rrule_backend
from .date_utils import DateLike, add_years, coerce_date
from .rrule_parser import parse_rule

logger = logging.getLogger(__name__)

# Open-ended series are shown for at most this many years past the anchor
DEFAULT_CAP_YEARS = 1


def policy_cap(anchor_date: DateLike, cap_years: int = DEFAULT_CAP_YEARS) -> date:
    """Anchor date plus the open-ended series cap."""
    return add_years(coerce_date(anchor_date), cap_years)


def compute_end_date(
    rule: Optional[str],
    anchor_date: DateLike,
    cap_years: int = DEFAULT_CAP_YEARS,
) -> Optional[date]:
    """Compute the last date a series can produce.

    - UNTIL present: the UNTIL date
    - COUNT present: the date of the COUNT-th occurrence
    - neither: anchor date plus ``cap_years`` calendar years

    A rule that cannot be parsed, or a COUNT rule that yields nothing, falls
    back to the open-ended cap so callers always get a date to store.

    Args:
        rule: Stored rule string; None or empty for a non-recurring event
        anchor_date: First occurrence of the series
        cap_years: Policy cap for open-ended series

    Returns:
        End date, or None when there is no rule at all
    """
    if not rule:
        return None

    anchor = coerce_date(anchor_date)

    try:
        parsed = parse_rule(rule)
    except RRuleParseError as e:
        logger.warning("Cannot compute end date for malformed rule %r: %s", rule, e.message)
        return policy_cap(anchor, cap_years)

    if parsed.until is not None:
        return parsed.until

    if parsed.count is not None:
        try:
            occurrences = rrule_backend.all_occurrences(parsed, anchor)
        except RRuleParseError as e:
            logger.warning("Cannot evaluate rule %r: %s", rule, e.message)
            occurrences = []
        if occurrences:
            return occurrences[-1]
        logger.warning("Rule %r produced no occurrences; using open-ended cap", rule)

    return policy_cap(anchor, cap_years)

"""Split a recurring series at an occurrence ("this and following" edits)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..calendar.date_utils import DateLike, coerce_date, previous_day
from ..calendar.end_date import DEFAULT_CAP_YEARS, compute_end_date
from ..calendar.rrule_parser import parse_rule
from ..exceptions import RecurrenceValidationError
from .rule_builder import OptionsLike, coerce_options, with_end_condition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesSplit:
    """Rules and dates for the two halves of a split series.

    Overrides of the original series dated on or after
    ``overrides_cutoff`` belong to the removed tail and can be deleted.
    """

    original_rule: str
    original_end_date: date
    new_rule: str
    new_anchor_date: date
    new_end_date: date
    overrides_cutoff: date


def split_series(
    rule: str,
    anchor_date: DateLike,
    instance_date: DateLike,
    new_rule: Optional[str] = None,
    options: OptionsLike = None,
    cap_years: int = DEFAULT_CAP_YEARS,
) -> SeriesSplit:
    """Truncate a series before ``instance_date`` and start a new one there.

    The original rule keeps its pattern and ends with UNTIL on the day before
    ``instance_date``. The new series uses ``new_rule`` when given; otherwise
    it repeats the original pattern with the end condition from ``options``
    (open-ended when omitted).

    Raises:
        RRuleParseError: If ``rule`` is malformed
        RecurrenceValidationError: If ``instance_date`` is not after the anchor
    """
    anchor = coerce_date(anchor_date)
    split_at = coerce_date(instance_date)
    if split_at <= anchor:
        raise RecurrenceValidationError(
            f"Cannot split series anchored {anchor.isoformat()} at {split_at.isoformat()}"
        )

    parsed = parse_rule(rule)
    truncated = parsed.with_until(previous_day(split_at)).to_string()

    if new_rule:
        following = parse_rule(new_rule).to_string()
    else:
        following = with_end_condition(parsed, coerce_options(options)).to_string()

    split = SeriesSplit(
        original_rule=truncated,
        original_end_date=compute_end_date(truncated, anchor, cap_years),
        new_rule=following,
        new_anchor_date=split_at,
        new_end_date=compute_end_date(following, split_at, cap_years),
        overrides_cutoff=split_at,
    )
    logger.debug("Split series %r at %s: %r / %r", rule, split_at, truncated, following)
    return split

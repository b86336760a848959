"""Build canonical rule strings from presets or custom parameters."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..calendar.date_utils import DateLike
from ..calendar.day_ordinals import get_day_ordinal
from ..calendar.rrule_parser import (
    SUPPORTED_FREQUENCIES,
    ByDay,
    ParsedRule,
    parse_byday_token,
    parse_rule,
    strip_end_clause,
)
from ..exceptions import RRuleParseError
from ..models import EndType, RuleOptions
from . import presets

logger = logging.getLogger(__name__)

OptionsLike = Union[RuleOptions, dict[str, Any], None]


def coerce_options(options: OptionsLike) -> RuleOptions:
    if options is None:
        return RuleOptions()
    if isinstance(options, RuleOptions):
        return options
    return RuleOptions.model_validate(options)


def preset_pattern(preset: str, anchor_date: DateLike) -> Optional[ParsedRule]:
    """Open-ended rule for a non-custom preset, or None for an unknown key.

    The day code and week-of-month ordinal come from the anchor date.
    """
    info = get_day_ordinal(anchor_date)
    day = info.day_code

    if preset == presets.WEEKLY:
        return ParsedRule(freq="WEEKLY", by_day=(ByDay(day),))
    if preset == presets.BIWEEKLY:
        return ParsedRule(freq="WEEKLY", interval=2, by_day=(ByDay(day),))
    if preset == presets.MONTHLY_SAME_WEEK:
        return ParsedRule(freq="MONTHLY", by_day=(ByDay(day, info.nth),))
    if preset == presets.MONTHLY_LAST:
        return ParsedRule(freq="MONTHLY", by_day=(ByDay(day, -1),))
    if preset == presets.BIMONTHLY:
        return ParsedRule(freq="MONTHLY", interval=2, by_day=(ByDay(day, info.nth),))
    return None


def _custom_pattern(anchor_date: DateLike, options: RuleOptions) -> Optional[ParsedRule]:
    freq = (options.custom_freq or "WEEKLY").strip().upper()
    if freq not in SUPPORTED_FREQUENCIES:
        logger.warning("Unsupported custom frequency %r", options.custom_freq)
        return None

    interval = options.custom_interval if options.custom_interval is not None else 1
    if interval < 1:
        logger.warning("Custom interval must be at least 1, got %d", interval)
        return None

    try:
        if options.custom_by_day:
            by_day = tuple(parse_byday_token(token, freq) for token in options.custom_by_day)
        elif freq == "WEEKLY":
            by_day = (ByDay(get_day_ordinal(anchor_date).day_code),)
        elif options.custom_monthly_position:
            by_day = (parse_byday_token(options.custom_monthly_position, freq),)
        else:
            # Monthly on the anchor's day of month
            by_day = ()
    except RRuleParseError as e:
        logger.warning("Invalid custom day selection: %s", e.message)
        return None

    return ParsedRule(freq=freq, interval=interval, by_day=by_day)


def with_end_condition(pattern: ParsedRule, options: RuleOptions) -> ParsedRule:
    if options.end_type == EndType.DATE and options.end_date:
        return pattern.with_until(options.end_date)
    if options.end_type == EndType.COUNT and options.count:
        return pattern.with_count(options.count)
    # "never": the one-year cap is applied by callers
    return pattern.without_end()


def build_rule(preset: str, anchor_date: DateLike, options: OptionsLike = None) -> Optional[str]:
    """Build the rule string for a preset and end condition.

    Args:
        preset: One of the catalog keys, or "custom"
        anchor_date: First occurrence of the series (date or YYYY-MM-DD)
        options: RuleOptions or an equivalent mapping

    Returns:
        Rule string, or None when the preset key, the options or the custom
        parameters are invalid. The caller should treat None as a
        validation failure.

    Raises:
        ValueError: If ``anchor_date`` is not a calendar date
    """
    try:
        opts = coerce_options(options)
    except ValidationError as e:
        logger.warning("Invalid recurrence options %r: %d error(s)", options, e.error_count())
        return None

    if preset == presets.CUSTOM:
        pattern = _custom_pattern(anchor_date, opts)
    else:
        pattern = preset_pattern(preset, anchor_date)
        if pattern is None:
            logger.warning("Unknown recurrence preset %r", preset)

    if pattern is None:
        return None

    rule = with_end_condition(pattern, opts).to_string()
    logger.debug("Built rule %r for preset %r anchored %s", rule, preset, anchor_date)
    return rule


def strip_end_condition(rule: str) -> str:
    """Remove UNTIL/COUNT from a rule string, leaving the pattern."""
    return strip_end_clause(rule)


def apply_end_condition(rule: str, options: OptionsLike) -> str:
    """Replace the end clause of ``rule`` with the one described by ``options``.

    Raises:
        RRuleParseError: If ``rule`` is malformed
    """
    return with_end_condition(parse_rule(rule), coerce_options(options)).to_string()

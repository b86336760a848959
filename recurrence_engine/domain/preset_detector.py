"""Recover the authoring choices from a stored rule string."""

from __future__ import annotations

import logging
from typing import Optional

from ..calendar.date_utils import DateLike
from ..calendar.rrule_parser import parse_rule
from ..exceptions import RRuleParseError
from ..models import EndCondition, EndType
from . import presets
from .rule_builder import preset_pattern

logger = logging.getLogger(__name__)


def detect_preset(rule: Optional[str], anchor_date: DateLike) -> Optional[str]:
    """Return the preset key a rule was built from, "custom", or None.

    The end condition is ignored. The remaining pattern (frequency,
    interval, day set) is compared field by field against each preset
    template for the anchor date, in catalog order.

    Args:
        rule: Stored rule string, or None for a non-recurring event
        anchor_date: Anchor date of the series

    Returns:
        Preset key, "custom" when nothing matches, None when ``rule`` is empty
    """
    if not rule:
        return None

    try:
        pattern = parse_rule(rule).without_end()
    except RRuleParseError as e:
        logger.debug("Rule %r does not parse (%s); treating as custom", rule, e.message)
        return presets.CUSTOM

    key = pattern.pattern_key()
    for preset in presets.PRESET_KEYS:
        template = preset_pattern(preset, anchor_date)
        if template is not None and template.pattern_key() == key:
            return preset
    return presets.CUSTOM


def parse_end_condition(rule: Optional[str]) -> EndCondition:
    """Read the end condition back out of a rule for the edit form.

    Unparseable or empty rules report "never".
    """
    if not rule:
        return EndCondition()

    try:
        parsed = parse_rule(rule)
    except RRuleParseError as e:
        logger.debug("Rule %r does not parse (%s); assuming no end", rule, e.message)
        return EndCondition()

    if parsed.until is not None:
        return EndCondition(end_type=EndType.DATE, end_date=parsed.until)
    if parsed.count is not None:
        return EndCondition(end_type=EndType.COUNT, count=parsed.count)
    return EndCondition()

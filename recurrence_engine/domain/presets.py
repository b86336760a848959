"""Recurrence preset catalog.

Presets are the pre-canned choices offered when authoring a recurring
event. Labels are phrased relative to the anchor date's weekday and its
week-of-month position.
"""

from __future__ import annotations

import logging

from ..calendar.date_utils import DateLike
from ..calendar.day_ordinals import get_day_ordinal, ordinal_label
from ..models import Preset

logger = logging.getLogger(__name__)

WEEKLY = "weekly"
BIWEEKLY = "biweekly"
MONTHLY_SAME_WEEK = "monthly_same_week"
MONTHLY_LAST = "monthly_last"
BIMONTHLY = "bimonthly"
CUSTOM = "custom"

# Detection priority order; the first matching template wins
PRESET_KEYS: tuple[str, ...] = (WEEKLY, BIWEEKLY, MONTHLY_SAME_WEEK, MONTHLY_LAST, BIMONTHLY)

ALL_PRESET_KEYS: tuple[str, ...] = (*PRESET_KEYS, CUSTOM)

_GENERIC_LABELS: tuple[tuple[str, str], ...] = (
    (WEEKLY, "Weekly"),
    (BIWEEKLY, "Every 2 weeks"),
    (MONTHLY_SAME_WEEK, "Monthly (same weekday)"),
    (MONTHLY_LAST, "Monthly (last weekday)"),
    (BIMONTHLY, "Every 2 months"),
    (CUSTOM, "Custom"),
)


def _generic_presets() -> list[Preset]:
    return [Preset(key=key, label=label) for key, label in _GENERIC_LABELS]


def list_presets(anchor_date: DateLike | None = None) -> list[Preset]:
    """Return the six preset choices in display order.

    Without a usable anchor date the labels are weekday-agnostic.
    """
    if not anchor_date:
        return _generic_presets()

    try:
        info = get_day_ordinal(anchor_date)
    except (TypeError, ValueError):
        logger.debug("Unusable anchor date %r for preset labels", anchor_date)
        return _generic_presets()

    day = info.day_name
    nth = ordinal_label(info.nth)

    return [
        Preset(key=WEEKLY, label=f"Weekly on {day}"),
        Preset(key=BIWEEKLY, label=f"Every 2 weeks on {day}"),
        Preset(key=MONTHLY_SAME_WEEK, label=f"Monthly on the {nth} {day}"),
        Preset(key=MONTHLY_LAST, label=f"Monthly on the last {day}"),
        Preset(key=BIMONTHLY, label=f"Every 2 months on the {nth} {day}"),
        Preset(key=CUSTOM, label="Custom"),
    ]

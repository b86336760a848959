"""List instances of many events over one date window."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import time
from typing import Optional, Union

from ..calendar.date_utils import DateLike, coerce_date
from ..calendar.end_date import DEFAULT_CAP_YEARS, compute_end_date
from ..models import Event, EventInstanceOverride, ExpandedInstance
from .instance_resolver import resolve_instances

logger = logging.getLogger(__name__)


def _sort_key(instance: ExpandedInstance) -> tuple:
    # Instances without a start time sort after timed ones on the same day
    start_time: Optional[time] = instance.start_time
    return (instance.instance_date, start_time is None, start_time or time.min)


def group_overrides(
    overrides: Optional[Iterable[EventInstanceOverride]],
) -> dict[Union[str, int], list[EventInstanceOverride]]:
    """Group overrides by the id of the event they belong to."""
    grouped: dict[Union[str, int], list[EventInstanceOverride]] = defaultdict(list)
    for override in overrides or ():
        grouped[override.event_id].append(override)
    return grouped


def list_event_instances(
    events: Iterable[Event],
    overrides: Optional[Iterable[EventInstanceOverride]],
    window_start: DateLike,
    window_end: DateLike,
    cap_years: int = DEFAULT_CAP_YEARS,
) -> list[ExpandedInstance]:
    """Resolve every event into instances inside the window.

    - Non-recurring events are included when their date is inside the window.
    - Recurring series are expanded up to their effective end date, so an
      open-ended series stops at its policy cap.
    - The result is sorted by instance date, then start time.

    Raises:
        RRuleParseError: If any event carries a malformed rule
    """
    start = coerce_date(window_start)
    end = coerce_date(window_end)
    by_event = group_overrides(overrides)

    instances: list[ExpandedInstance] = []
    for event in events:
        if not event.rrule:
            if start <= event.start_date <= end:
                instances.extend(resolve_instances(event, (), start, end))
            continue

        series_end = compute_end_date(event.rrule, event.start_date, cap_years)
        if series_end is not None and series_end < start:
            logger.debug("Series %s ended %s before window %s", event.id, series_end, start)
            continue

        effective_end = min(end, series_end) if series_end is not None else end
        instances.extend(
            resolve_instances(event, by_event.get(event.id, ()), start, effective_end)
        )

    instances.sort(key=_sort_key)
    logger.debug("Listed %d instances for %s..%s", len(instances), start, end)
    return instances

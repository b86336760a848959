"""Merge per-occurrence overrides onto generated dates."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import Optional

from ..calendar.date_utils import DateLike, coerce_date
from ..calendar.occurrence_generator import expand
from ..exceptions import InstanceCancelledError
from ..models import (
    OVERRIDABLE_FIELDS,
    Event,
    EventInstanceOverride,
    EventStatus,
    ExpandedInstance,
)

logger = logging.getLogger(__name__)


def _single_instance(event: Event) -> ExpandedInstance:
    data = event.model_dump()
    # Computed keys win over same-named extra columns on the event row
    data.update(
        instance_date=event.start_date,
        is_recurring=False,
        is_cancelled=event.status == EventStatus.CANCELLED,
    )
    return ExpandedInstance(**data)


def _merge(
    event: Event, instance_date: date, override: Optional[EventInstanceOverride]
) -> ExpandedInstance:
    data = event.model_dump()
    if override is not None:
        data.update(override.explicit_fields())
    data.update(instance_date=instance_date, is_recurring=True, is_cancelled=False)
    return ExpandedInstance(**data)


def build_override_map(
    event: Event, overrides: Optional[Iterable[EventInstanceOverride]]
) -> dict[date, EventInstanceOverride]:
    """Index an event's overrides by instance date.

    Overrides belonging to another event are skipped. When two overrides
    share a date the later one wins.
    """
    override_map: dict[date, EventInstanceOverride] = {}
    for override in overrides or ():
        if override.event_id != event.id:
            logger.debug(
                "Ignoring override for event %s while resolving event %s",
                override.event_id,
                event.id,
            )
            continue
        override_map[override.instance_date] = override
    return override_map


def resolve_instances(
    event: Event,
    overrides: Optional[Iterable[EventInstanceOverride]],
    window_start: DateLike,
    window_end: DateLike,
) -> list[ExpandedInstance]:
    """Expand an event into displayable instances for a window.

    A non-recurring event always yields exactly its anchor-date instance,
    whatever overrides are passed. For a recurring event each generated date
    is merged with its override (if any); cancelled dates are dropped.

    Args:
        event: Parent event
        overrides: Instance overrides for this event
        window_start: First date of the window (inclusive)
        window_end: Last date of the window (inclusive)

    Returns:
        Instances in ascending date order

    Raises:
        RRuleParseError: If the event's rule is malformed
    """
    if not event.rrule:
        return [_single_instance(event)]

    dates = expand(event.rrule, event.start_date, window_start, window_end)
    override_map = build_override_map(event, overrides)

    instances: list[ExpandedInstance] = []
    cancelled = 0
    for instance_date in dates:
        override = override_map.pop(instance_date, None)
        if override is not None and override.is_cancelled:
            cancelled += 1
            continue
        instances.append(_merge(event, instance_date, override))

    # Whatever is left never matched a generated date
    start = coerce_date(window_start)
    end = coerce_date(window_end)
    dangling = sum(1 for d in override_map if start <= d <= end)
    if dangling:
        logger.debug(
            "Event %s has %d override(s) in %s..%s that match no occurrence",
            event.id,
            dangling,
            start,
            end,
        )

    logger.debug(
        "Resolved event %s: %d instances, %d cancelled",
        event.id,
        len(instances),
        cancelled,
    )
    return instances


def resolve_instance(
    event: Event,
    override: Optional[EventInstanceOverride],
    instance_date: Optional[DateLike] = None,
) -> ExpandedInstance:
    """Resolve a single occurrence for a detail view.

    No check is made that ``instance_date`` is produced by the rule.

    Raises:
        InstanceCancelledError: If the override cancels the occurrence
    """
    if not event.rrule:
        return _single_instance(event)

    day = coerce_date(instance_date) if instance_date is not None else event.start_date
    if override is not None and override.instance_date != day:
        logger.debug("Override for %s does not apply to %s", override.instance_date, day)
        override = None
    if override is not None and override.is_cancelled:
        raise InstanceCancelledError(
            f"Instance {day.isoformat()} of event {event.id} has been cancelled",
            instance_date=day,
        )
    return _merge(event, day, override)

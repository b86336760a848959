"""recurrence_engine - recurring event expansion for the organizing platform.

Turns an authored event plus sparse per-occurrence overrides into the dates
members see, and maps stored rule strings back to the presets and summaries
shown when editing. Every function is pure; persistence, notifications and
display timezones belong to the caller.
"""

__version__ = "1.0.0"

from .calendar.day_ordinals import get_day_ordinal
from .calendar.end_date import compute_end_date
from .calendar.occurrence_generator import expand, next_occurrence, upcoming_occurrences
from .config_loader import Config, load_config
from .domain.event_listing import list_event_instances
from .domain.instance_resolver import resolve_instance, resolve_instances
from .domain.preset_detector import detect_preset, parse_end_condition
from .domain.presets import list_presets
from .domain.rule_builder import apply_end_condition, build_rule, strip_end_condition
from .domain.rule_describer import describe
from .domain.series_split import SeriesSplit, split_series
from .exceptions import (
    InstanceCancelledError,
    RecurrenceError,
    RecurrenceValidationError,
    RRuleParseError,
)
from .models import (
    EndCondition,
    EndType,
    Event,
    EventInstanceOverride,
    EventStatus,
    ExpandedInstance,
    Preset,
    RuleOptions,
)
from .recurrence_logging import configure_from_config, configure_recurrence_logging

__all__ = [
    "Config",
    "EndCondition",
    "EndType",
    "Event",
    "EventInstanceOverride",
    "EventStatus",
    "ExpandedInstance",
    "InstanceCancelledError",
    "Preset",
    "RRuleParseError",
    "RecurrenceError",
    "RecurrenceValidationError",
    "RuleOptions",
    "SeriesSplit",
    "__version__",
    "apply_end_condition",
    "build_rule",
    "compute_end_date",
    "configure_from_config",
    "configure_recurrence_logging",
    "describe",
    "detect_preset",
    "expand",
    "get_day_ordinal",
    "list_event_instances",
    "list_presets",
    "load_config",
    "next_occurrence",
    "parse_end_condition",
    "resolve_instance",
    "resolve_instances",
    "split_series",
    "strip_end_condition",
    "upcoming_occurrences",
]

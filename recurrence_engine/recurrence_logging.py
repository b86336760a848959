"""
Central logging configuration for recurrence_engine.

The engine itself only emits records through module loggers; this module
lets the host service choose how chatty those loggers are. Expansion runs
on every event listing, so DEBUG output is off unless asked for.
"""

import logging
import os
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config_loader import Config

ENGINE_LOGGERS: tuple[str, ...] = (
    "recurrence_engine",
    "recurrence_engine.config_loader",
    "recurrence_engine.calendar.rrule_parser",
    "recurrence_engine.calendar.rrule_backend",
    "recurrence_engine.calendar.occurrence_generator",
    "recurrence_engine.calendar.end_date",
    "recurrence_engine.domain.presets",
    "recurrence_engine.domain.rule_builder",
    "recurrence_engine.domain.preset_detector",
    "recurrence_engine.domain.rule_describer",
    "recurrence_engine.domain.instance_resolver",
    "recurrence_engine.domain.event_listing",
    "recurrence_engine.domain.series_split",
)

VALID_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_recurrence_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    level: Optional[str] = None,
) -> None:
    """
    Configure logger levels for the recurrence engine.

    Args:
        debug_mode: Whether to enable debug logging for engine modules
        force_debug: Override debug mode setting (None to use env var detection)
        level: Base level name when not debugging, usually ``Config.log_level``

    Environment Variables:
        RECURRENCE_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        RECURRENCE_LOG_LEVEL: Override engine log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("RECURRENCE_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("RECURRENCE_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    base_level = (level or "INFO").upper()
    if base_level not in VALID_LEVELS:
        logging.getLogger("recurrence_engine").warning(
            "Unknown log level %r; using INFO", level
        )
        base_level = "INFO"

    resolved = logging.DEBUG if final_debug else getattr(logging, base_level)
    if env_log_level in VALID_LEVELS and force_debug is None:
        resolved = getattr(logging, env_log_level)

    for name in ENGINE_LOGGERS:
        logging.getLogger(name).setLevel(resolved)

    # dateutil is quiet, but keep it from inheriting DEBUG from a root logger
    logging.getLogger("dateutil").setLevel(logging.WARNING)

    logging.getLogger("recurrence_engine").debug(
        "Recurrence engine logging configured at %s", logging.getLevelName(resolved)
    )


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for name in ENGINE_LOGGERS:
        status[name] = logging.getLevelName(logging.getLogger(name).level)
    return status


def configure_from_config(config: "Config", debug_mode: bool = False) -> None:
    """Apply the log level from a loaded engine Config."""
    logging.getLogger("recurrence_engine").info(
        "Applying configured log_level=%s", config.log_level
    )
    configure_recurrence_logging(debug_mode=debug_mode, level=config.log_level)

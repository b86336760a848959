"""recurrence_engine.config_loader

Config loader for the recurrence engine.

- Reads YAML (JSON files parse as YAML too).
- Exposes a typed dataclass `Config` and a `load_config()` helper that accepts
  an optional path override.
- The engine functions take these values as explicit arguments; the calling
  service loads a Config once and passes the values through.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .calendar.end_date import DEFAULT_CAP_YEARS
from .calendar.occurrence_generator import DEFAULT_UPCOMING_HORIZON_DAYS, DEFAULT_UPCOMING_LIMIT
from .recurrence_logging import VALID_LEVELS

logger = logging.getLogger(__name__)

MAX_CAP_YEARS = 5


@dataclass
class Config:
    """Typed configuration for the recurrence engine.

    Fields:
        open_ended_cap_years: years an open-ended series runs past its anchor (1..5)
        upcoming_limit: number of dates in an event's "upcoming" list
        upcoming_horizon_days: how far ahead the "upcoming" list looks
        log_level: engine logging level name, applied by
            recurrence_logging.configure_from_config
    """

    open_ended_cap_years: int = DEFAULT_CAP_YEARS
    upcoming_limit: int = DEFAULT_UPCOMING_LIMIT
    upcoming_horizon_days: int = DEFAULT_UPCOMING_HORIZON_DAYS
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Config:
        """Create Config from a plain mapping, applying defaults and validation.

        Numeric-like values are coerced to int; out-of-range values are clamped
        with a logged warning rather than rejected.
        """
        if data is None:
            data = {}

        def _coerce_int(key: str, default: int) -> int:
            raw = data.get(key, default)
            try:
                return int(raw)
            except (TypeError, ValueError):
                logger.warning("Config %s=%r is not an int; using default %d", key, raw, default)
                return default

        cap_years = _coerce_int("open_ended_cap_years", DEFAULT_CAP_YEARS)
        if cap_years < 1:
            logger.warning("open_ended_cap_years %d below minimum; coercing to 1", cap_years)
            cap_years = 1
        elif cap_years > MAX_CAP_YEARS:
            logger.warning(
                "open_ended_cap_years %d above maximum; coercing to %d", cap_years, MAX_CAP_YEARS
            )
            cap_years = MAX_CAP_YEARS

        upcoming_limit = _coerce_int("upcoming_limit", DEFAULT_UPCOMING_LIMIT)
        if upcoming_limit < 0:
            logger.warning("upcoming_limit %d is negative; coercing to 0", upcoming_limit)
            upcoming_limit = 0

        horizon = _coerce_int("upcoming_horizon_days", DEFAULT_UPCOMING_HORIZON_DAYS)
        if horizon < 1:
            logger.warning("upcoming_horizon_days %d below minimum; coercing to 1", horizon)
            horizon = 1

        log_level = data.get("log_level", "INFO")
        log_level = str(log_level).upper() if log_level is not None else "INFO"
        if log_level not in VALID_LEVELS:
            logger.warning("log_level %r is not a known level; using INFO", log_level)
            log_level = "INFO"

        return cls(
            open_ended_cap_years=cap_years,
            upcoming_limit=upcoming_limit,
            upcoming_horizon_days=horizon,
            log_level=log_level,
        )


def _load_yaml(path: Path) -> Any:
    """Load a YAML (or JSON) document; empty files load as an empty mapping."""
    loaded = yaml.safe_load(path.read_text())
    if loaded is None:
        return {}
    return loaded


def load_config(path: str | None = None) -> Config:
    """Load configuration from a YAML/JSON file and return a Config instance.

    Args:
        path: Optional path to the config file. If not provided the default is
              ./recurrence.yaml (relative to current working dir).

    Returns:
        Config dataclass instance with values from file (or defaults).

    Behavior:
    - If file is missing: returns Config() with defaults.
    - If file exists but top-level is not a mapping: raises ValueError.
    - A top-level ``recurrence`` section is used when present, so the engine
      settings can live inside a larger service config.
    """
    p = Path(path) if path else Path.cwd() / "recurrence.yaml"
    logger.debug("Attempting to load config from %s", p)
    if not p.exists():
        logger.info("Config file %s not found; using defaults", p)
        return Config()

    raw = _load_yaml(p)
    if not isinstance(raw, dict):
        logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, raw)
        raise ValueError("Config file must contain a mapping at top level")  # noqa: TRY004
    section = raw.get("recurrence", raw)
    if not isinstance(section, dict):
        raise ValueError("`recurrence` config section must be a mapping")  # noqa: TRY004
    cfg = Config.from_dict(section)
    logger.info("Loaded configuration from %s", p)
    logger.debug("Configuration values: %s", cfg)
    return cfg

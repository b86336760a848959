"""Tests for recurrence_engine.recurrence_logging."""

import importlib
import logging
import pkgutil

import pytest

import recurrence_engine
from recurrence_engine.config_loader import Config
from recurrence_engine.recurrence_logging import (
    ENGINE_LOGGERS,
    configure_from_config,
    configure_recurrence_logging,
    get_logging_status,
)

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_levels(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("RECURRENCE_DEBUG", raising=False)
    monkeypatch.delenv("RECURRENCE_LOG_LEVEL", raising=False)
    names = (*ENGINE_LOGGERS, "dateutil")
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_default_is_info() -> None:
    configure_recurrence_logging()

    for name in ENGINE_LOGGERS:
        assert logging.getLogger(name).level == logging.INFO
    assert logging.getLogger("dateutil").level == logging.WARNING


def test_debug_mode() -> None:
    configure_recurrence_logging(debug_mode=True)
    assert logging.getLogger("recurrence_engine").level == logging.DEBUG


def test_env_debug_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECURRENCE_DEBUG", "true")
    configure_recurrence_logging()
    assert logging.getLogger("recurrence_engine.domain.event_listing").level == logging.DEBUG


def test_env_level_overrides_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECURRENCE_LOG_LEVEL", "warning")
    configure_recurrence_logging(debug_mode=True)
    assert logging.getLogger("recurrence_engine").level == logging.WARNING


def test_force_debug_wins_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECURRENCE_DEBUG", "1")
    monkeypatch.setenv("RECURRENCE_LOG_LEVEL", "ERROR")
    configure_recurrence_logging(force_debug=False)
    assert logging.getLogger("recurrence_engine").level == logging.INFO


def test_logging_status_lists_engine_loggers() -> None:
    configure_recurrence_logging(debug_mode=True)
    status = get_logging_status()

    assert "root" in status
    assert all(status[name] == "DEBUG" for name in ENGINE_LOGGERS)


def test_configured_level_is_the_base_level() -> None:
    configure_recurrence_logging(level="warning")
    assert logging.getLogger("recurrence_engine.domain.rule_builder").level == logging.WARNING


def test_debug_mode_beats_configured_level() -> None:
    configure_recurrence_logging(debug_mode=True, level="ERROR")
    assert logging.getLogger("recurrence_engine").level == logging.DEBUG


def test_unknown_configured_level_falls_back_to_info() -> None:
    configure_recurrence_logging(level="CHATTY")
    assert logging.getLogger("recurrence_engine").level == logging.INFO


def test_configure_from_config_applies_log_level() -> None:
    configure_from_config(Config(log_level="ERROR"))

    for name in ENGINE_LOGGERS:
        assert logging.getLogger(name).level == logging.ERROR


def test_every_module_logger_is_listed() -> None:
    module_loggers = []
    for info in pkgutil.walk_packages(recurrence_engine.__path__, "recurrence_engine."):
        module = importlib.import_module(info.name)
        if isinstance(getattr(module, "logger", None), logging.Logger):
            module_loggers.append(module.logger.name)

    assert module_loggers
    assert set(module_loggers) <= set(ENGINE_LOGGERS)

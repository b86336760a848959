"""Shared fixtures for recurrence engine tests."""

from collections.abc import Callable
from datetime import date
from typing import Any

import pytest

from recurrence_engine.models import Event, EventInstanceOverride


def pytest_configure(config: Any) -> None:
    config.addinivalue_line("markers", "unit: fast, isolated unit tests")


@pytest.fixture
def tuesday_anchor() -> date:
    """2024-01-02, the first Tuesday of January 2024."""
    return date(2024, 1, 2)


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for events with realistic content fields.

    Defaults describe a weekly Tuesday chapter meeting anchored 2024-01-02.
    """

    def _make(**overrides: Any) -> Event:
        fields: dict[str, Any] = {
            "id": "evt-1",
            "start_date": date(2024, 1, 2),
            "start_time": "18:30",
            "end_time": "20:00",
            "rrule": "FREQ=WEEKLY;BYDAY=TU",
            "title": "Chapter meeting",
            "description": "Monthly business and committee reports",
            "location_name": "Union Hall",
            "location_address": "12 Main St",
            "location_city": "Springfield",
            "location_state": "IL",
            "location_zip": "62701",
            "is_virtual": False,
            "virtual_link": None,
            "max_attendees": 40,
            "status": "published",
        }
        fields.update(overrides)
        return Event(**fields)

    return _make


@pytest.fixture
def make_override() -> Callable[..., EventInstanceOverride]:
    """Factory for instance overrides of event ``evt-1``."""

    def _make(instance_date: Any, **fields: Any) -> EventInstanceOverride:
        fields.setdefault("event_id", "evt-1")
        return EventInstanceOverride(instance_date=instance_date, **fields)

    return _make

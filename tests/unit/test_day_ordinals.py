"""Tests for recurrence_engine.calendar.day_ordinals."""

from datetime import date, datetime

import pytest

from recurrence_engine.calendar.day_ordinals import (
    DAY_CODES,
    DAY_NAMES,
    get_day_ordinal,
    ordinal_label,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "value,day_code,day_index,nth,day_name",
    [
        ("2024-01-02", "TU", 2, 1, "Tuesday"),
        ("2024-01-07", "SU", 0, 1, "Sunday"),
        ("2024-01-08", "MO", 1, 2, "Monday"),
        ("2024-01-16", "TU", 2, 3, "Tuesday"),
        ("2024-01-28", "SU", 0, 4, "Sunday"),
        ("2024-01-30", "TU", 2, 5, "Tuesday"),
        ("2024-02-29", "TH", 4, 5, "Thursday"),
        ("2023-12-30", "SA", 6, 5, "Saturday"),
    ],
)
def test_get_day_ordinal(value: str, day_code: str, day_index: int, nth: int, day_name: str) -> None:
    info = get_day_ordinal(value)
    assert info.day_code == day_code
    assert info.day_index == day_index
    assert info.nth == nth
    assert info.day_name == day_name


def test_get_day_ordinal_accepts_date_and_datetime() -> None:
    assert get_day_ordinal(date(2024, 1, 2)) == get_day_ordinal("2024-01-02")
    assert get_day_ordinal(datetime(2024, 1, 2, 23, 0)) == get_day_ordinal("2024-01-02")


def test_get_day_ordinal_rejects_malformed_date() -> None:
    with pytest.raises(ValueError):
        get_day_ordinal("2024-13-45")


@pytest.mark.parametrize(
    "nth,label",
    [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (5, "5th"), (-1, "last"), (-2, "2nd to last")],
)
def test_ordinal_label(nth: int, label: str) -> None:
    assert ordinal_label(nth) == label


def test_tables_are_sunday_first_and_immutable() -> None:
    assert DAY_CODES[0] == "SU"
    assert DAY_NAMES[0] == "Sunday"
    assert len(DAY_CODES) == len(DAY_NAMES) == 7
    assert isinstance(DAY_CODES, tuple)

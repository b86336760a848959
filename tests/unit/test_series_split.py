"""Tests for recurrence_engine.domain.series_split."""

from datetime import date

import pytest

from recurrence_engine.calendar.occurrence_generator import expand
from recurrence_engine.domain.series_split import split_series
from recurrence_engine.exceptions import RecurrenceValidationError, RRuleParseError

pytestmark = pytest.mark.unit


def test_split_count_series_keeps_pattern() -> None:
    split = split_series("FREQ=WEEKLY;BYDAY=TU;COUNT=10", "2024-01-02", "2024-01-23")

    assert split.original_rule == "FREQ=WEEKLY;BYDAY=TU;UNTIL=20240122T235959Z"
    assert split.original_end_date == date(2024, 1, 22)
    assert split.new_rule == "FREQ=WEEKLY;BYDAY=TU"
    assert split.new_anchor_date == date(2024, 1, 23)
    assert split.new_end_date == date(2025, 1, 23)
    assert split.overrides_cutoff == date(2024, 1, 23)


def test_halves_do_not_overlap() -> None:
    split = split_series("FREQ=WEEKLY;BYDAY=TU", "2024-01-02", "2024-01-23")

    before = expand(split.original_rule, "2024-01-02", "2024-01-01", "2024-12-31")
    after = expand(split.new_rule, split.new_anchor_date, "2024-01-01", "2024-02-29")

    assert before == [date(2024, 1, 2), date(2024, 1, 9), date(2024, 1, 16)]
    assert after[0] == date(2024, 1, 23)


def test_new_series_end_condition_from_options() -> None:
    split = split_series(
        "FREQ=WEEKLY;BYDAY=TU",
        "2024-01-02",
        "2024-01-23",
        options={"end_type": "count", "count": 4},
    )

    assert split.new_rule == "FREQ=WEEKLY;BYDAY=TU;COUNT=4"
    assert split.new_end_date == date(2024, 2, 13)


def test_explicit_new_rule_is_normalized() -> None:
    split = split_series(
        "FREQ=WEEKLY;BYDAY=TU",
        "2024-01-02",
        "2024-02-06",
        new_rule="byday=-1tu;freq=monthly",
    )

    assert split.new_rule == "FREQ=MONTHLY;BYDAY=-1TU"
    assert split.new_end_date == date(2025, 2, 6)


@pytest.mark.parametrize("instance_date", ["2024-01-02", "2023-12-26"])
def test_split_at_or_before_anchor_is_rejected(instance_date: str) -> None:
    with pytest.raises(RecurrenceValidationError):
        split_series("FREQ=WEEKLY;BYDAY=TU", "2024-01-02", instance_date)


def test_malformed_rule_raises() -> None:
    with pytest.raises(RRuleParseError):
        split_series("FREQ=WEEKLY;BYDAY=ZZ", "2024-01-02", "2024-01-23")

"""Tests for recurrence_engine.calendar.end_date."""

from datetime import date

import pytest

from recurrence_engine.calendar.end_date import compute_end_date, policy_cap
from recurrence_engine.calendar.occurrence_generator import expand

pytestmark = pytest.mark.unit


class TestComputeEndDate:
    """End date for UNTIL, COUNT and open-ended rules."""

    def test_until_date_is_returned(self) -> None:
        rule = "FREQ=WEEKLY;BYDAY=TU;UNTIL=20240630T235959Z"
        assert compute_end_date(rule, "2024-01-02") == date(2024, 6, 30)

    def test_count_returns_last_occurrence(self) -> None:
        assert compute_end_date("FREQ=WEEKLY;BYDAY=TU;COUNT=10", "2024-01-02") == date(2024, 3, 5)

    def test_count_matches_nth_expanded_occurrence(self) -> None:
        rule = "FREQ=MONTHLY;BYDAY=-1TU;COUNT=5"
        expanded = expand(rule, "2024-01-02", "2024-01-02", "2029-01-02")

        assert expanded[4] == date(2024, 5, 28)
        assert compute_end_date(rule, "2024-01-02") == expanded[4]

    def test_open_ended_is_capped_at_one_year(self) -> None:
        assert compute_end_date("FREQ=WEEKLY;BYDAY=TU", "2024-01-02") == date(2025, 1, 2)

    def test_cap_years_is_configurable(self) -> None:
        assert compute_end_date("FREQ=WEEKLY;BYDAY=TU", "2024-01-02", cap_years=2) == date(2026, 1, 2)

    def test_leap_day_anchor_caps_to_february_28(self) -> None:
        assert compute_end_date("FREQ=MONTHLY", "2024-02-29") == date(2025, 2, 28)

    @pytest.mark.parametrize("rule", ["garbage", "FREQ=DAILY", "FREQ=WEEKLY;COUNT=2;UNTIL=20240101"])
    def test_malformed_rule_falls_back_to_cap(self, rule: str) -> None:
        assert compute_end_date(rule, "2024-01-02") == date(2025, 1, 2)

    @pytest.mark.parametrize("rule", [None, ""])
    def test_no_rule_has_no_end(self, rule: object) -> None:
        assert compute_end_date(rule, "2024-01-02") is None  # type: ignore[arg-type]


def test_policy_cap() -> None:
    assert policy_cap("2024-01-02") == date(2025, 1, 2)
    assert policy_cap(date(2024, 1, 2), cap_years=3) == date(2027, 1, 2)

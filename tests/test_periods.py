"""Tests for month-key and activation-window helpers."""

from __future__ import annotations

from datetime import date

import pytest

from walletsage.services import periods


def test_month_key_zero_pads():
    assert periods.month_key(date(2024, 3, 9)) == "2024-03"
    assert periods.current_month(date(2025, 12, 31)) == "2025-12"


@pytest.mark.parametrize("bad", ["2024-13", "2024-00", "24-01", "2024/01", "", "2024-1"])
def test_parse_month_rejects_malformed_keys(bad):
    with pytest.raises(ValueError):
        periods.parse_month(bad)


def test_due_date_clamps_to_month_end():
    assert periods.due_date("2024-02", 31) == date(2024, 2, 29)
    assert periods.due_date("2023-02", 30) == date(2023, 2, 28)
    assert periods.due_date("2024-04", 31) == date(2024, 4, 30)
    assert periods.due_date("2024-05", 31) == date(2024, 5, 31)
    assert periods.due_date("2024-05", 15) == date(2024, 5, 15)


def test_window_compares_year_month_not_day():
    start = date(2024, 3, 31)
    end = date(2024, 6, 1)

    assert periods.window_violation("2024-02", start, end) == periods.BEFORE
    assert periods.window_violation("2024-03", start, end) is None
    assert periods.window_violation("2024-06", start, end) is None
    assert periods.window_violation("2024-07", start, end) == periods.AFTER
    assert periods.in_window("2031-01", start, None)


def test_window_across_year_boundary():
    assert periods.window_violation("2023-12", date(2024, 1, 1)) == periods.BEFORE
    assert periods.window_violation("2025-01", date(2024, 1, 1), date(2024, 12, 31)) == periods.AFTER


def test_months_between_and_shift():
    assert periods.months_between((2024, 11), (2025, 2)) == 3
    assert periods.months_between((2025, 2), (2024, 11)) == -3
    assert periods.shift_month("2024-12", 1) == "2025-01"
    assert periods.shift_month("2024-01", -1) == "2023-12"
    assert periods.shift_month("2024-05", 0) == "2024-05"

"""Month-key helpers shared by the reconciliation engine and status views.

A month key is a zero-padded ``YYYY-MM`` string. Activation windows are
compared by (year, month) pairs only; the day of month matters solely when
computing a concrete due date.
"""

from __future__ import annotations

import calendar
import re
from datetime import date
from typing import Optional

_MONTH_KEY = re.compile(r"^(\d{4})-(\d{2})$")

BEFORE = "before"
AFTER = "after"


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def parse_month(key: str) -> tuple[int, int]:
    """Return (year, month) for a ``YYYY-MM`` key."""

    match = _MONTH_KEY.match(key or "")
    if not match:
        raise ValueError(f"Invalid month key: {key!r} (expected YYYY-MM)")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in key: {key!r}")
    return year, month


def current_month(today: Optional[date] = None) -> str:
    return month_key(today or date.today())


def year_month(value: date) -> tuple[int, int]:
    return value.year, value.month


def months_between(start: tuple[int, int], end: tuple[int, int]) -> int:
    """Signed number of months from ``start`` to ``end``."""

    return (end[0] - start[0]) * 12 + (end[1] - start[1])


def shift_month(key: str, delta: int) -> str:
    year, month = parse_month(key)
    total = year * 12 + (month - 1) + delta
    return f"{total // 12:04d}-{total % 12 + 1:02d}"


def due_date(month: str, period_day: int) -> date:
    """Concrete date for ``period_day`` in ``month``, clamped to the month end.

    Day 31 in a 30-day month lands on the 30th; it never rolls into the
    following month.
    """

    year, month_num = parse_month(month)
    last_day = calendar.monthrange(year, month_num)[1]
    return date(year, month_num, min(max(int(period_day), 1), last_day))


def window_violation(
    month: str, start_date: date, end_date: Optional[date] = None
) -> Optional[str]:
    """Return ``"before"``/``"after"`` when ``month`` falls outside the window."""

    target = parse_month(month)
    if target < year_month(start_date):
        return BEFORE
    if end_date is not None and target > year_month(end_date):
        return AFTER
    return None


def in_window(month: str, start_date: date, end_date: Optional[date] = None) -> bool:
    return window_violation(month, start_date, end_date) is None


__all__ = [
    "AFTER",
    "BEFORE",
    "current_month",
    "due_date",
    "in_window",
    "month_key",
    "months_between",
    "parse_month",
    "shift_month",
    "window_violation",
    "year_month",
]

"""Per-month status of fixed items and monthly rollups."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from ..domain.repositories import GenerationLedger
from ..models.fixed_item import FixedItem
from . import periods


class FixedItemStatus(str, Enum):
    INACTIVE = "inactive"
    PAID = "paid"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"


def classify(
    item: FixedItem,
    month: str,
    *,
    generations: GenerationLedger,
    today: Optional[date] = None,
) -> FixedItemStatus:
    """Return the status of ``item`` for ``month``.

    Precedence: paused items and months outside the activation window are
    inactive; a generated month is paid; in the current month an unpaid item
    is overdue once its due date has passed. Any other unpaid month reads as
    upcoming, including past months.
    """

    today = today or date.today()
    if not item.is_active:
        return FixedItemStatus.INACTIVE
    if not periods.in_window(month, item.start_date, item.end_date):
        return FixedItemStatus.INACTIVE
    if generations.exists(item.id, month):
        return FixedItemStatus.PAID
    if month == periods.current_month(today):
        if periods.due_date(month, item.period_day) < today:
            return FixedItemStatus.OVERDUE
    return FixedItemStatus.UPCOMING


@dataclass(slots=True)
class StatusBucket:
    """Items sharing a status, with their count and summed amount."""

    items: list[FixedItem] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def amount(self) -> float:
        return round(sum(item.amount for item in self.items), 2)

    def as_dict(self) -> dict[str, float]:
        return {"count": self.count, "amount": self.amount}


@dataclass(slots=True)
class MonthlyRollup:
    month: str
    total: StatusBucket
    paid: StatusBucket
    overdue: StatusBucket
    upcoming: StatusBucket

    @property
    def pending(self) -> StatusBucket:
        """Everything in the month that has not been generated yet."""
        return StatusBucket(
            items=sorted(self.overdue.items + self.upcoming.items, key=lambda i: i.period_day)
        )

    def as_dict(self) -> dict[str, dict[str, float]]:
        return {
            "total": self.total.as_dict(),
            "paid": self.paid.as_dict(),
            "overdue": self.overdue.as_dict(),
            "upcoming": self.upcoming.as_dict(),
            "pending": self.pending.as_dict(),
        }


def summarize(
    items: Iterable[FixedItem],
    month: str,
    *,
    generations: GenerationLedger,
    today: Optional[date] = None,
) -> MonthlyRollup:
    """Bucket the active items whose window contains ``month`` by status."""

    today = today or date.today()
    eligible = sorted(
        (
            item
            for item in items
            if item.is_active and periods.in_window(month, item.start_date, item.end_date)
        ),
        key=lambda item: item.period_day,
    )

    buckets = {status: StatusBucket() for status in FixedItemStatus}
    for item in eligible:
        status = classify(item, month, generations=generations, today=today)
        buckets[status].items.append(item)

    return MonthlyRollup(
        month=month,
        total=StatusBucket(items=list(eligible)),
        paid=buckets[FixedItemStatus.PAID],
        overdue=buckets[FixedItemStatus.OVERDUE],
        upcoming=buckets[FixedItemStatus.UPCOMING],
    )


def remaining_count(item: FixedItem, from_month: str) -> Optional[int]:
    """Months left in the window including ``from_month``; None when open-ended."""

    if item.end_date is None:
        return None
    remaining = periods.months_between(
        periods.parse_month(from_month), periods.year_month(item.end_date)
    )
    return max(0, remaining + 1)


__all__ = [
    "FixedItemStatus",
    "MonthlyRollup",
    "StatusBucket",
    "classify",
    "remaining_count",
    "summarize",
]

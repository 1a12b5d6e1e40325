"""Fixed item registry: CRUD over plan definitions plus cascade delete."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..domain.repositories import FixedItemRepository
from ..logging_config import get_logger
from ..models._ids import utcnow
from ..models.fixed_item import FixedItem
from . import periods
from .reconciliation import ReconciliationEngine

logger = get_logger(__name__)

EDITABLE_FIELDS = {
    "title",
    "amount",
    "category_id",
    "description",
    "period_day",
    "is_active",
    "start_date",
    "end_date",
}


class FixedItemRegistry:
    """Definitions of one kind of fixed item.

    Removal goes through the reconciliation engine so generated transactions
    and their records disappear together with the definition.
    """

    def __init__(self, repository: FixedItemRepository, engine: ReconciliationEngine) -> None:
        self.repository = repository
        self.engine = engine
        self.kind = repository.kind

    def add(
        self,
        *,
        title: str,
        amount: float,
        period_day: int,
        start_date: date,
        end_date: Optional[date] = None,
        category_id: Optional[str] = None,
        description: str = "",
    ) -> FixedItem:
        item = FixedItem(
            kind=self.kind,
            title=title,
            amount=amount,
            period_day=period_day,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            description=description,
            is_active=True,
        )
        created = self.repository.create(item)
        logger.info("Fixed item added", extra={"kind": self.kind, "item_id": created.id})
        return created

    def update(self, item_id: str, changes: Mapping[str, Any]) -> Optional[FixedItem]:
        """Merge ``changes`` into the item and refresh ``updated_at``."""

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fixed item fields: {sorted(unknown)}")
        item = self.repository.get_by_id(item_id)
        if item is None:
            return None
        for key, value in changes.items():
            setattr(item, key, value)
        item.updated_at = utcnow()
        return self.repository.update(item)

    def toggle_active(self, item_id: str) -> Optional[FixedItem]:
        item = self.repository.get_by_id(item_id)
        if item is None:
            return None
        item.is_active = not item.is_active
        item.updated_at = utcnow()
        updated = self.repository.update(item)
        logger.info(
            "Fixed item toggled",
            extra={"kind": self.kind, "item_id": item_id, "is_active": updated.is_active},
        )
        return updated

    def remove(self, item_id: str) -> bool:
        """Delete the item after undoing every month generated for it."""

        if self.repository.get_by_id(item_id) is None:
            return False
        records = self.engine.generations.list_for_item(item_id)
        for record in records:
            self.engine.undo(item_id, record.month)
        self.repository.delete(item_id)
        logger.info(
            "Fixed item removed",
            extra={"kind": self.kind, "item_id": item_id, "undone_months": len(records)},
        )
        return True

    # -- queries -----------------------------------------------------------

    def by_id(self, item_id: str) -> Optional[FixedItem]:
        return self.repository.get_by_id(item_id)

    def list_all(self) -> list[FixedItem]:
        return self.repository.list_all()

    def active(self) -> list[FixedItem]:
        return self.repository.list_active()

    def by_category(self, category_id: str) -> list[FixedItem]:
        return self.repository.filter_by_category(category_id)

    def total_monthly_amount(self) -> float:
        return round(sum(item.amount for item in self.active()), 2)

    def due_in_month(self, month: str) -> list[FixedItem]:
        """Active items whose activation window contains ``month``."""
        return [
            item
            for item in self.active()
            if periods.in_window(month, item.start_date, item.end_date)
        ]


__all__ = ["EDITABLE_FIELDS", "FixedItemRegistry"]

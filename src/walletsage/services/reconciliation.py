"""Period reconciliation: materialize fixed items into ledger transactions.

One engine instance serves one registry (income or expense). For a given
month it turns a fixed item into exactly one ledger transaction and keeps a
generation record linking the two, so the effect can be undone later.

Write ordering across the two stores:

* generate: ledger transaction first, generation record last. If the record
  was not stored the transaction is removed again before the error
  propagates.
* undo: generation record first, then the transaction. A record never
  outlives its transaction; a transaction that is already gone is fine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..domain.repositories import FixedItemRepository, GenerationLedger, LedgerStore
from ..logging_config import get_logger
from ..models.fixed_item import FixedItem
from ..models.generation import GenerationRecord
from ..models.transaction import LedgerTransaction
from . import periods

logger = get_logger(__name__)

TITLE_SUFFIX = {"income": "Fixed Income", "expense": "Fixed Expense"}


class ReconcileError(str, Enum):
    """Expected, reportable reasons an engine operation did nothing."""

    ITEM_NOT_FOUND = "item_not_found"
    ITEM_INACTIVE = "item_inactive"
    ALREADY_GENERATED = "already_generated"
    BEFORE_ACTIVATION = "before_activation"
    AFTER_DEACTIVATION = "after_deactivation"
    NOTHING_TO_UNDO = "nothing_to_undo"


@dataclass(frozen=True, slots=True)
class GenerationResult:
    transaction_id: Optional[str] = None
    error: Optional[ReconcileError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class UndoResult:
    error: Optional[ReconcileError] = None
    # False when the ledger transaction had already been deleted out-of-band
    transaction_removed: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class ReconciliationEngine:
    """Generate and undo monthly transactions for one kind of fixed item."""

    def __init__(
        self,
        items: FixedItemRepository,
        generations: GenerationLedger,
        ledger: LedgerStore,
        *,
        kind: str,
    ) -> None:
        self.items = items
        self.generations = generations
        self.ledger = ledger
        self.kind = kind

    # -- single item -------------------------------------------------------

    def _check(self, item: Optional[FixedItem], month: str) -> Optional[ReconcileError]:
        """First failing precondition for generating ``item`` in ``month``."""

        if item is None:
            return ReconcileError.ITEM_NOT_FOUND
        if not item.is_active:
            return ReconcileError.ITEM_INACTIVE
        if self.generations.exists(item.id, month):
            return ReconcileError.ALREADY_GENERATED
        violation = periods.window_violation(month, item.start_date, item.end_date)
        if violation == periods.BEFORE:
            return ReconcileError.BEFORE_ACTIVATION
        if violation == periods.AFTER:
            return ReconcileError.AFTER_DEACTIVATION
        return None

    def _build_transaction(self, item: FixedItem, month: str) -> LedgerTransaction:
        suffix = TITLE_SUFFIX.get(self.kind, "Fixed")
        note = f"Generated from {suffix.lower()} for {month}"
        description = f"{item.description} - {note}" if item.description else note
        return LedgerTransaction(
            title=f"{item.title} ({suffix})",
            amount=item.amount,
            direction=self.kind,
            category_id=item.category_id,
            date=periods.due_date(month, item.period_day),
            description=description,
        )

    def generate(self, item_id: str, month: str) -> GenerationResult:
        """Create the ledger transaction for ``item_id`` in ``month`` exactly once."""

        periods.parse_month(month)
        item = self.items.get_by_id(item_id)
        error = self._check(item, month)
        if error is not None:
            logger.info(
                "Generation refused",
                extra={"kind": self.kind, "item_id": item_id, "month": month, "reason": error.value},
            )
            return GenerationResult(error=error)

        transaction_id = self.ledger.add(self._build_transaction(item, month))
        try:
            self.generations.record(
                GenerationRecord(item_id=item.id, month=month, transaction_id=transaction_id)
            )
        except Exception:
            if self.generations.exists(item.id, month):
                # the record committed before the error; its transaction stays
                logger.exception(
                    "Error after generation was recorded",
                    extra={"kind": self.kind, "item_id": item_id, "month": month,
                           "transaction_id": transaction_id},
                )
                raise
            logger.exception(
                "Generation record failed; rolling back transaction",
                extra={"kind": self.kind, "item_id": item_id, "month": month},
            )
            self.ledger.remove(transaction_id)
            raise

        logger.info(
            "Generated fixed item transaction",
            extra={
                "kind": self.kind,
                "item_id": item_id,
                "month": month,
                "transaction_id": transaction_id,
            },
        )
        return GenerationResult(transaction_id=transaction_id)

    def undo(self, item_id: str, month: str) -> UndoResult:
        """Remove the generated transaction and its record for ``(item_id, month)``."""

        record = self.generations.get(item_id, month)
        if record is None:
            logger.info(
                "Nothing to undo",
                extra={"kind": self.kind, "item_id": item_id, "month": month},
            )
            return UndoResult(error=ReconcileError.NOTHING_TO_UNDO)

        self.generations.delete(item_id, month)
        removed = self.ledger.remove(record.transaction_id)
        if not removed:
            logger.warning(
                "Generated transaction was already gone",
                extra={"kind": self.kind, "item_id": item_id, "month": month,
                       "transaction_id": record.transaction_id},
            )
        logger.info(
            "Undid fixed item transaction",
            extra={"kind": self.kind, "item_id": item_id, "month": month},
        )
        return UndoResult(transaction_removed=removed)

    # -- batches -----------------------------------------------------------

    def generate_all_due(self, month: str) -> int:
        """Best-effort generation for every active item; returns how many succeeded."""

        created = 0
        for item in self.items.list_active():
            if self.generate(item.id, month).ok:
                created += 1
        logger.info(
            "Batch generation finished",
            extra={"kind": self.kind, "month": month, "created": created},
        )
        return created

    def clear_month(self, month: str) -> int:
        """Undo every generation recorded for ``month``; returns how many were removed."""

        removed = 0
        for record in self.generations.list_for_month(month):
            if self.undo(record.item_id, month).ok:
                removed += 1
        logger.info(
            "Cleared generated month",
            extra={"kind": self.kind, "month": month, "removed": removed},
        )
        return removed

    # -- queries -----------------------------------------------------------

    def is_generated(self, item_id: str, month: str) -> bool:
        return self.generations.exists(item_id, month)

    def generated_in_month(self, month: str) -> list[GenerationRecord]:
        return self.generations.list_for_month(month)

    def generated_months(self) -> list[str]:
        return self.generations.months()


__all__ = [
    "GenerationResult",
    "ReconcileError",
    "ReconciliationEngine",
    "UndoResult",
]

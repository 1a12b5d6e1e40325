"""Generation ledger protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.generation import GenerationRecord


class GenerationLedger(Protocol):
    """Source of truth for which (item, month) pairs were materialized."""

    def get(self, item_id: str, month: str) -> Optional[GenerationRecord]:
        ...

    def exists(self, item_id: str, month: str) -> bool:
        ...

    def record(self, record: GenerationRecord) -> GenerationRecord:
        """Persist a record; duplicates for (item_id, month) must fail."""
        ...

    def delete(self, item_id: str, month: str) -> bool:
        ...

    def list_for_month(self, month: str) -> list[GenerationRecord]:
        ...

    def list_for_item(self, item_id: str) -> list[GenerationRecord]:
        ...

    def months(self) -> list[str]:
        """Distinct month keys with at least one record, ascending."""
        ...

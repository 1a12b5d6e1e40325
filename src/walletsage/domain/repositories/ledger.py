"""Ledger store protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.transaction import LedgerTransaction


class LedgerStore(Protocol):
    """Owns realized transactions and their aggregates."""

    def add(self, transaction: LedgerTransaction) -> str:
        """Persist a transaction and return its id."""
        ...

    def remove(self, transaction_id: str) -> bool:
        """Delete a transaction; ``False`` when it does not exist."""
        ...

    def update(self, transaction_id: str, patch: Mapping[str, Any]) -> Optional[LedgerTransaction]:
        """Merge ``patch`` into an existing transaction."""
        ...

    def get(self, transaction_id: str) -> Optional[LedgerTransaction]:
        """Retrieve a transaction by id."""
        ...

    def list_all(self) -> list[LedgerTransaction]:
        """List every transaction, newest first."""
        ...

    def count(self) -> int:
        ...

    def total_balance(self) -> float:
        """Income minus expenses across the whole ledger."""
        ...

    def total_by_direction(self, direction: str) -> float:
        """Sum of amounts for ``income`` or ``expense``."""
        ...

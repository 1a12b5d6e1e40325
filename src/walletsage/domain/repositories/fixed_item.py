"""Fixed item repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.fixed_item import FixedItem


class FixedItemRepository(Protocol):
    """Stores fixed item definitions for a single kind (income or expense)."""

    kind: str

    def get_by_id(self, item_id: str) -> Optional[FixedItem]:
        ...

    def list_all(self) -> list[FixedItem]:
        ...

    def list_active(self) -> list[FixedItem]:
        ...

    def filter_by_category(self, category_id: str) -> list[FixedItem]:
        ...

    def create(self, item: FixedItem) -> FixedItem:
        ...

    def update(self, item: FixedItem) -> FixedItem:
        ...

    def delete(self, item_id: str) -> bool:
        ...

"""Category registry protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from ...models.category import Category


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    """Display metadata resolved from a category id."""

    name: str
    color: str
    icon: str


class CategoryRepository(Protocol):
    """Maps category ids to display metadata."""

    def get_by_id(self, category_id: str) -> Optional[Category]:
        ...

    def resolve(self, category_id: Optional[str]) -> Optional[CategoryInfo]:
        """Return display metadata, or ``None`` for unknown ids."""
        ...

    def display_for(self, category_id: Optional[str]) -> CategoryInfo:
        """Display metadata with a placeholder for unknown ids."""
        ...

    def list_by_kind(self, kind: str) -> list[Category]:
        ...

    def create(self, category: Category) -> Category:
        ...

    def delete(self, category_id: str) -> bool:
        ...

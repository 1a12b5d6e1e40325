"""SQLModel table exports."""

from .category import Category
from .fixed_item import FixedItem
from .generation import GenerationRecord
from .transaction import LedgerTransaction

DIRECTIONS = ("income", "expense")

__all__ = [
    "Category",
    "DIRECTIONS",
    "FixedItem",
    "GenerationRecord",
    "LedgerTransaction",
]

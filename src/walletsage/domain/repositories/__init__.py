"""Repository protocol definitions for domain layer."""

from .category import CategoryInfo, CategoryRepository
from .fixed_item import FixedItemRepository
from .generation import GenerationLedger
from .ledger import LedgerStore

__all__ = [
    "CategoryInfo",
    "CategoryRepository",
    "FixedItemRepository",
    "GenerationLedger",
    "LedgerStore",
]

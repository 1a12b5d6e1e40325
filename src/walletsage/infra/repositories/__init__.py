"""Concrete repository implementations using SQLModel."""

from .category import SQLModelCategoryRepository
from .fixed_item import SQLModelFixedItemRepository
from .generation import SQLModelGenerationLedger
from .transaction import SQLModelLedgerStore

__all__ = [
    "SQLModelCategoryRepository",
    "SQLModelFixedItemRepository",
    "SQLModelGenerationLedger",
    "SQLModelLedgerStore",
]

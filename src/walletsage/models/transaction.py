"""SQLModel definitions for realized ledger transactions."""

from __future__ import annotations

import datetime as dt
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ._ids import new_id, utcnow


class LedgerTransaction(SQLModel, table=True):
    """A single income or expense entry in the ledger."""

    __tablename__: ClassVar[str] = "ledger_transaction"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    title: str = Field(nullable=False, max_length=255)
    amount: float = Field(nullable=False, description="Always positive; sign comes from direction")
    direction: str = Field(nullable=False, index=True, max_length=16)
    category_id: Optional[str] = Field(default=None, index=True, max_length=32)
    # annotated through the module so the field name does not shadow the type
    date: dt.date = Field(nullable=False, index=True)
    description: str = Field(default="", max_length=512)
    created_at: dt.datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: dt.datetime = Field(default_factory=utcnow, nullable=False)

"""Generation ledger: which (item, month) pairs already have a transaction."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from ._ids import new_id, utcnow


class GenerationRecord(SQLModel, table=True):
    """Links one fixed item's month to the ledger transaction created for it."""

    __tablename__: ClassVar[str] = "generation_record"
    __table_args__ = (UniqueConstraint("item_id", "month", name="uq_generation_item_month"),)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    item_id: str = Field(nullable=False, index=True, max_length=32)
    kind: str = Field(nullable=False, index=True, max_length=16)
    month: str = Field(nullable=False, index=True, min_length=7, max_length=7)
    transaction_id: str = Field(nullable=False, max_length=32)
    generated_at: datetime = Field(default_factory=utcnow, nullable=False)

"""Recurring (fixed) income and expense plan definitions."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ._ids import new_id, utcnow


class FixedItem(SQLModel, table=True):
    """A monthly recurring income or expense.

    Income and expense registries share this table and are partitioned by
    ``kind``. ``period_day`` is the nominal day of month (1-31); it is
    clamped to the month length whenever a concrete date is needed.
    """

    __tablename__: ClassVar[str] = "fixed_item"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    kind: str = Field(nullable=False, index=True, max_length=16)
    title: str = Field(nullable=False, max_length=255)
    amount: float = Field(nullable=False)
    category_id: Optional[str] = Field(default=None, index=True, max_length=32)
    description: str = Field(default="", max_length=512)
    period_day: int = Field(nullable=False, ge=1, le=31)
    is_active: bool = Field(default=True, nullable=False)
    start_date: date = Field(nullable=False)
    end_date: Optional[date] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

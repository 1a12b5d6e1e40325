"""Ledger category definitions."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ._ids import new_id, utcnow


class Category(SQLModel, table=True):
    """Display metadata for income and expense categories."""

    __tablename__: ClassVar[str] = "category"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str = Field(index=True, nullable=False, max_length=64)
    kind: str = Field(default="expense", nullable=False, max_length=16)
    color: str = Field(default="#6B7280", max_length=7)
    icon: str = Field(default="Tag", max_length=32)
    description: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

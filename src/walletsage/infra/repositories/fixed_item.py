"""SQLModel implementation of the fixed item store."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models import DIRECTIONS
from ...models.fixed_item import FixedItem


class SQLModelFixedItemRepository:
    """Fixed item definitions of one kind (``income`` or ``expense``)."""

    def __init__(self, session_factory: Callable[[], Session], *, kind: str):
        if kind not in DIRECTIONS:
            raise ValueError(f"Unsupported fixed item kind: {kind!r}")
        self.session_factory = session_factory
        self.kind = kind

    def get_by_id(self, item_id: str) -> Optional[FixedItem]:
        with self.session_factory() as session:
            obj = session.exec(
                select(FixedItem).where(FixedItem.id == item_id, FixedItem.kind == self.kind)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def _list(self, *clauses) -> list[FixedItem]:
        with self.session_factory() as session:
            statement = (
                select(FixedItem)
                .where(FixedItem.kind == self.kind, *clauses)
                .order_by(FixedItem.created_at)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_all(self) -> list[FixedItem]:
        return self._list()

    def list_active(self) -> list[FixedItem]:
        return self._list(FixedItem.is_active == True)  # noqa: E712

    def filter_by_category(self, category_id: str) -> list[FixedItem]:
        return self._list(FixedItem.category_id == category_id)

    def create(self, item: FixedItem) -> FixedItem:
        with self.session_factory() as session:
            item.kind = self.kind
            session.add(item)
            session.commit()
            session.refresh(item)
            session.expunge(item)
            return item

    def update(self, item: FixedItem) -> FixedItem:
        with self.session_factory() as session:
            item.kind = self.kind
            merged = session.merge(item)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, item_id: str) -> bool:
        with self.session_factory() as session:
            item = session.exec(
                select(FixedItem).where(FixedItem.id == item_id, FixedItem.kind == self.kind)
            ).first()
            if item is None:
                return False
            session.delete(item)
            session.commit()
            return True

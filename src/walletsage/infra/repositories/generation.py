"""SQLModel implementation of the generation ledger."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.generation import GenerationRecord


class SQLModelGenerationLedger:
    """Generation records for one kind of fixed item."""

    def __init__(self, session_factory: Callable[[], Session], *, kind: str):
        self.session_factory = session_factory
        self.kind = kind

    def get(self, item_id: str, month: str) -> Optional[GenerationRecord]:
        with self.session_factory() as session:
            obj = session.exec(
                select(GenerationRecord)
                .where(GenerationRecord.kind == self.kind)
                .where(GenerationRecord.item_id == item_id)
                .where(GenerationRecord.month == month)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def exists(self, item_id: str, month: str) -> bool:
        return self.get(item_id, month) is not None

    def record(self, record: GenerationRecord) -> GenerationRecord:
        """Persist a record; the (item_id, month) unique constraint rejects duplicates."""
        with self.session_factory() as session:
            record.kind = self.kind
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
            return record

    def delete(self, item_id: str, month: str) -> bool:
        with self.session_factory() as session:
            record = session.exec(
                select(GenerationRecord)
                .where(GenerationRecord.kind == self.kind)
                .where(GenerationRecord.item_id == item_id)
                .where(GenerationRecord.month == month)
            ).first()
            if record is None:
                return False
            session.delete(record)
            session.commit()
            return True

    def _list(self, *clauses) -> list[GenerationRecord]:
        with self.session_factory() as session:
            statement = (
                select(GenerationRecord)
                .where(GenerationRecord.kind == self.kind, *clauses)
                .order_by(GenerationRecord.month, GenerationRecord.generated_at)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_for_month(self, month: str) -> list[GenerationRecord]:
        return self._list(GenerationRecord.month == month)

    def list_for_item(self, item_id: str) -> list[GenerationRecord]:
        return self._list(GenerationRecord.item_id == item_id)

    def months(self) -> list[str]:
        with self.session_factory() as session:
            statement = (
                select(GenerationRecord.month)
                .where(GenerationRecord.kind == self.kind)
                .distinct()
                .order_by(GenerationRecord.month)
            )
            return list(session.exec(statement).all())

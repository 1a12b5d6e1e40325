"""SQLModel implementation of the ledger store."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Mapping, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from ...models._ids import utcnow
from ...models.transaction import LedgerTransaction

_IMMUTABLE_FIELDS = {"id", "created_at"}


class SQLModelLedgerStore:
    """SQLModel-based ledger store implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get(self, transaction_id: str) -> Optional[LedgerTransaction]:
        """Retrieve a transaction by ID."""
        with self.session_factory() as session:
            obj = session.get(LedgerTransaction, transaction_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[LedgerTransaction]:
        """List all transactions, newest first."""
        with self.session_factory() as session:
            statement = select(LedgerTransaction).order_by(
                LedgerTransaction.date.desc(), LedgerTransaction.created_at.desc()  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def filter_by_date_range(self, start_date: date, end_date: date) -> list[LedgerTransaction]:
        """Get transactions within an inclusive date range."""
        with self.session_factory() as session:
            statement = (
                select(LedgerTransaction)
                .where(LedgerTransaction.date >= start_date)
                .where(LedgerTransaction.date <= end_date)
                .order_by(LedgerTransaction.date.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def count(self) -> int:
        with self.session_factory() as session:
            return session.exec(select(func.count()).select_from(LedgerTransaction)).one()

    def add(self, transaction: LedgerTransaction) -> str:
        """Create a new transaction and return its id."""
        with self.session_factory() as session:
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction.id

    def update(
        self, transaction_id: str, patch: Mapping[str, Any]
    ) -> Optional[LedgerTransaction]:
        """Merge ``patch`` into an existing transaction."""
        unknown = set(patch) - set(LedgerTransaction.model_fields)
        if unknown:
            raise ValueError(f"Unknown transaction fields: {sorted(unknown)}")
        with self.session_factory() as session:
            transaction = session.get(LedgerTransaction, transaction_id)
            if transaction is None:
                return None
            for key, value in patch.items():
                if key in _IMMUTABLE_FIELDS:
                    continue
                setattr(transaction, key, value)
            transaction.updated_at = utcnow()
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def remove(self, transaction_id: str) -> bool:
        """Delete a transaction by ID; unknown ids are a no-op."""
        with self.session_factory() as session:
            transaction = session.get(LedgerTransaction, transaction_id)
            if transaction is None:
                return False
            session.delete(transaction)
            session.commit()
            return True

    def total_by_direction(self, direction: str) -> float:
        with self.session_factory() as session:
            total = session.exec(
                select(func.coalesce(func.sum(LedgerTransaction.amount), 0.0)).where(
                    LedgerTransaction.direction == direction
                )
            ).one()
            return float(total)

    def total_balance(self) -> float:
        return self.total_by_direction("income") - self.total_by_direction("expense")

    def get_monthly_summary(self, year: int, month: int) -> dict[str, float]:
        """Get income/expense summary for a month.

        Uses [first day, first day of next month) so nothing overlaps.
        """
        start_date = date(year, month, 1)
        end_date = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        with self.session_factory() as session:
            statement = (
                select(LedgerTransaction)
                .where(LedgerTransaction.date >= start_date)
                .where(LedgerTransaction.date < end_date)
            )
            transactions = session.exec(statement).all()

            income = sum(t.amount for t in transactions if t.direction == "income")
            expenses = sum(t.amount for t in transactions if t.direction == "expense")

            return {
                "income": income,
                "expenses": expenses,
                "net": income - expenses,
            }

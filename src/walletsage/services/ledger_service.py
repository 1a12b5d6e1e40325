"""Ledger-specific helpers for summaries and category breakdowns."""

from __future__ import annotations

from typing import Iterable

from ..domain.repositories import CategoryRepository
from ..models.transaction import LedgerTransaction


def compute_summary(transactions: Iterable[LedgerTransaction]) -> dict[str, float]:
    """Compute income, expenses, and net totals from the provided transactions."""

    transactions = list(transactions)
    income = sum(t.amount for t in transactions if t.direction == "income")
    expenses = sum(t.amount for t in transactions if t.direction == "expense")
    return {
        "income": round(income, 2),
        "expenses": round(expenses, 2),
        "net": round(income - expenses, 2),
    }


def spending_by_category(
    transactions: Iterable[LedgerTransaction],
    categories: CategoryRepository,
    *,
    direction: str = "expense",
) -> list[dict[str, object]]:
    """Roll up totals by category, resolving names with a fallback."""

    totals: dict[str | None, float] = {}
    for tx in transactions:
        if tx.direction != direction:
            continue
        totals[tx.category_id] = totals.get(tx.category_id, 0.0) + tx.amount

    breakdown: list[dict[str, object]] = []
    for cat_id, total in totals.items():
        info = categories.display_for(cat_id)
        breakdown.append(
            {
                "category_id": cat_id,
                "name": info.name,
                "color": info.color,
                "amount": round(total, 2),
            }
        )
    breakdown.sort(key=lambda entry: entry["amount"], reverse=True)
    return breakdown


def top_categories(
    breakdown: Iterable[dict[str, object]], limit: int = 5
) -> list[dict[str, object]]:
    """Return the top N categories from a breakdown list."""

    return list(breakdown)[:limit]


__all__ = ["compute_summary", "spending_by_category", "top_categories"]

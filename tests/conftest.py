"""Pytest configuration and shared fixtures for WalletSage tests.

This module provides database fixtures, store/engine wiring, and factories for
testing reconciliation, status and registry logic without touching a real
data directory.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from walletsage.infra.database import create_session_factory
from walletsage.infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelFixedItemRepository,
    SQLModelGenerationLedger,
    SQLModelLedgerStore,
)
from walletsage.models import FixedItem
from walletsage.services.reconciliation import ReconciliationEngine
from walletsage.services.registry import FixedItemRegistry

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture
def mutation_log():
    """List that grows by one entry per committed mutation."""
    return []


@pytest.fixture(scope="function")
def session_factory(db_engine, mutation_log):
    """Session factory wired to record mutation signals in ``mutation_log``."""
    return create_session_factory(db_engine, on_mutation=lambda: mutation_log.append(1))


# =============================================================================
# Stores and engines
# =============================================================================


@pytest.fixture
def ledger(session_factory) -> SQLModelLedgerStore:
    return SQLModelLedgerStore(session_factory)


@pytest.fixture
def categories(session_factory) -> SQLModelCategoryRepository:
    return SQLModelCategoryRepository(session_factory)


@pytest.fixture
def expense_items(session_factory) -> SQLModelFixedItemRepository:
    return SQLModelFixedItemRepository(session_factory, kind="expense")


@pytest.fixture
def expense_generations(session_factory) -> SQLModelGenerationLedger:
    return SQLModelGenerationLedger(session_factory, kind="expense")


@pytest.fixture
def expense_engine(expense_items, expense_generations, ledger) -> ReconciliationEngine:
    return ReconciliationEngine(expense_items, expense_generations, ledger, kind="expense")


@pytest.fixture
def expense_registry(expense_items, expense_engine) -> FixedItemRegistry:
    return FixedItemRegistry(expense_items, expense_engine)


@pytest.fixture
def income_engine(session_factory, ledger) -> ReconciliationEngine:
    return ReconciliationEngine(
        SQLModelFixedItemRepository(session_factory, kind="income"),
        SQLModelGenerationLedger(session_factory, kind="income"),
        ledger,
        kind="income",
    )


@pytest.fixture
def income_registry(income_engine) -> FixedItemRegistry:
    return FixedItemRegistry(income_engine.items, income_engine)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def expense_factory(expense_registry):
    """Factory for persisted fixed expenses with sensible defaults."""

    def _create(
        title: str = "Rent",
        amount: float = 1200.0,
        period_day: int = 5,
        start_date: date = date(2024, 1, 1),
        end_date: date | None = None,
        category_id: str | None = None,
    ) -> FixedItem:
        return expense_registry.add(
            title=title,
            amount=amount,
            period_day=period_day,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
        )

    return _create


def make_item(**overrides) -> FixedItem:
    """Unsaved fixed item for pure classifier tests."""

    values = {
        "kind": "expense",
        "title": "Gym",
        "amount": 50.0,
        "period_day": 10,
        "start_date": date(2024, 1, 1),
        "is_active": True,
    }
    values.update(overrides)
    return FixedItem(**values)


class FakeGenerations:
    """In-memory stand-in for the generation ledger (only ``exists`` is used)."""

    def __init__(self, pairs=()):
        self.pairs = set(pairs)

    def exists(self, item_id: str, month: str) -> bool:
        return (item_id, month) in self.pairs

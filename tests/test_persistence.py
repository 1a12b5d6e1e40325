"""Tests for the mutation signal and whole-state snapshots."""

from __future__ import annotations

import json
from datetime import date

import pytest

from walletsage import TestConfig, create_app_context
from walletsage.models import LedgerTransaction
from walletsage.services import snapshot


def test_reads_do_not_signal_mutation(ledger, mutation_log):
    ledger.list_all()
    ledger.get("missing")
    ledger.total_balance()
    ledger.remove("missing")

    assert mutation_log == []


def test_each_write_signals_once(ledger, mutation_log):
    tx_id = ledger.add(LedgerTransaction(title="a", amount=1.0, direction="income", date=date(2024, 1, 1)))
    assert len(mutation_log) == 1

    ledger.update(tx_id, {"amount": 2.0})
    ledger.remove(tx_id)
    assert len(mutation_log) == 3


def test_generate_signals_after_both_writes(expense_factory, expense_engine, mutation_log):
    item = expense_factory()
    mutation_log.clear()

    expense_engine.generate(item.id, "2024-03")

    # one for the ledger insert, one for the generation record
    assert len(mutation_log) == 2


def test_refused_generation_does_not_signal(expense_factory, expense_engine, mutation_log):
    item = expense_factory(start_date=date(2025, 1, 1))
    mutation_log.clear()

    expense_engine.generate(item.id, "2024-03")

    assert mutation_log == []


def test_export_import_round_trip(session_factory, expense_factory, expense_engine, ledger, categories):
    categories.seed_defaults()
    item = expense_factory(end_date=date(2024, 12, 31))
    expense_engine.generate(item.id, "2024-03")
    exported = snapshot.export_state(session_factory)
    json.dumps(exported)  # must be JSON compatible

    expense_engine.clear_month("2024-03")
    assert ledger.count() == 0

    counts = snapshot.import_state(session_factory, exported)

    assert counts["transactions"] == 1
    assert counts["generations"] == 1
    assert counts["fixed_items"] == 1
    assert ledger.count() == 1
    assert expense_engine.is_generated(item.id, "2024-03")
    restored = expense_engine.items.get_by_id(item.id)
    assert restored.end_date == date(2024, 12, 31)


def test_import_rejects_unknown_version(session_factory):
    with pytest.raises(ValueError):
        snapshot.import_state(session_factory, {"version": 99})


def test_write_and_read_snapshot_file(tmp_path, session_factory, ledger):
    ledger.add(LedgerTransaction(title="a", amount=1.0, direction="income", date=date(2024, 1, 1)))
    path = snapshot.write_snapshot(tmp_path / "state" / "wallet.json", session_factory)

    assert path.exists()
    assert json.loads(path.read_text())["version"] == snapshot.SNAPSHOT_VERSION

    ledger.remove(ledger.list_all()[0].id)
    snapshot.read_snapshot(path, session_factory)
    assert ledger.count() == 1


def test_read_missing_snapshot_raises(tmp_path, session_factory):
    with pytest.raises(FileNotFoundError):
        snapshot.read_snapshot(tmp_path / "absent.json", session_factory)


def test_app_context_saves_snapshot_after_each_mutation(tmp_path, monkeypatch):
    snapshot_file = tmp_path / "wallet.json"
    monkeypatch.setenv("WALLETSAGE_SNAPSHOT_FILE", str(snapshot_file))
    ctx = create_app_context(TestConfig(data_dir=tmp_path))

    item = ctx.expenses.add(title="Rent", amount=900.0, period_day=1, start_date=date(2024, 1, 1))
    ctx.expense_engine.generate(item.id, "2024-02")

    saved = json.loads(snapshot_file.read_text())
    assert len(saved["fixed_items"]) == 1
    assert len(saved["transactions"]) == 1
    assert saved["generations"][0]["month"] == "2024-02"

    # a fresh context loads the saved state at startup
    fresh = create_app_context(TestConfig(data_dir=tmp_path))
    assert fresh.ledger.count() == 1
    assert fresh.expense_engine.is_generated(item.id, "2024-02")


def test_app_context_wiring(tmp_path):
    ctx = create_app_context(TestConfig(data_dir=tmp_path))
    calls = []
    ctx.subscribe(lambda: calls.append("saved"))

    salary = ctx.incomes.add(title="Salary", amount=4000.0, period_day=25, start_date=date(2024, 1, 1))

    assert calls == ["saved"]
    assert ctx.engine_for("income") is ctx.income_engine
    assert ctx.registry_for("expense") is ctx.expenses
    assert ctx.expenses.by_id(salary.id) is None
    with pytest.raises(ValueError):
        ctx.engine_for("transfer")

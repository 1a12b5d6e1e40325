"""Tests for the command line front end."""

from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

from walletsage.cli import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    """Invoke the CLI against a throwaway data directory."""

    monkeypatch.setenv("WALLETSAGE_DEV_MODE", "0")
    monkeypatch.delenv("WALLETSAGE_DATABASE_URL", raising=False)
    monkeypatch.delenv("WALLETSAGE_SNAPSHOT_FILE", raising=False)
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args])

    yield _run

    package_logger = logging.getLogger("walletsage")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


def _last_line(result) -> str:
    return result.output.strip().splitlines()[-1]


def test_full_month_cycle(run):
    added = run("add-fixed", "--title", "Rent", "--amount", "1200", "--day", "31", "--start", "2024-01-01")
    assert added.exit_code == 0, added.output
    item_id = _last_line(added)

    generated = run("generate", item_id, "2024-02")
    assert generated.exit_code == 0, generated.output

    again = run("generate", item_id, "2024-02")
    assert again.exit_code == 1
    assert "already generated" in again.output

    summary = run("status", "2024-02", "--json")
    assert summary.exit_code == 0
    assert json.loads(summary.output)["paid"] == {"count": 1, "amount": 1200.0}

    balance = run("balance")
    assert "-1200.00" in balance.output

    undone = run("undo", item_id, "2024-02")
    assert undone.exit_code == 0
    assert run("undo", item_id, "2024-02").exit_code == 1


def test_generate_all_and_clear_month(run):
    for title in ("Rent", "Gym"):
        run("add-fixed", "--title", title, "--amount", "10", "--day", "1", "--start", "2024-01-01")

    assert "Generated 2 transactions" in run("generate-all", "2024-05").output
    assert "Removed 2 transactions" in run("clear-month", "2024-05").output


def test_window_refusal_message(run):
    item_id = _last_line(
        run("add-fixed", "--kind", "income", "--title", "Bonus", "--amount", "500",
            "--day", "15", "--start", "2024-06-01", "--end", "2024-06-30")
    )

    early = run("generate", "--kind", "income", item_id, "2024-05")
    late = run("generate", "--kind", "income", item_id, "2024-07")

    assert "before the item's start date" in early.output
    assert "after the item's end date" in late.output


def test_invalid_month_is_rejected(run):
    result = run("generate", "abc", "2024-13")
    assert result.exit_code == 2


def test_toggle_remove_and_list(run):
    item_id = _last_line(run("add-fixed", "--title", "Phone", "--amount", "45", "--day", "9", "--start", "2024-01-01"))

    assert _last_line(run("toggle", item_id)) == "paused"
    listing = run("list-fixed", "--month", "2024-03")
    assert "inactive" in listing.output
    assert "Phone" in listing.output

    assert run("remove-fixed", item_id).exit_code == 0
    assert run("remove-fixed", item_id).exit_code == 1


def test_export_and_import(run, tmp_path):
    run("seed-categories")
    path = tmp_path / "snap.json"

    assert run("export", str(path)).exit_code == 0
    imported = run("import", str(path))

    assert imported.exit_code == 0, imported.output
    assert "categories=12" in imported.output


def test_balance_breakdown_and_month_filter(run):
    rent = _last_line(run("add-fixed", "--title", "Rent", "--amount", "900", "--day", "1", "--start", "2024-01-01"))
    gym = _last_line(run("add-fixed", "--title", "Gym", "--amount", "40", "--day", "15", "--start", "2024-01-01"))
    run("generate", rent, "2024-02")
    run("generate", gym, "2024-03")

    overall = run("balance")
    assert "-940.00" in overall.output
    assert "Uncategorized" in overall.output
    assert "940.00" in overall.output.splitlines()[-1]

    march = run("balance", "--month", "2024-03")
    assert "-40.00" in march.output

    assert run("balance", "--month", "March").exit_code == 2

"""Whole-state JSON snapshots.

The store is persisted as one document holding every table, written after
each mutation when a snapshot file is configured and loaded wholesale at
startup.
"""

from __future__ import annotations

import json
import os
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from sqlmodel import Session, SQLModel, select

from ..logging_config import get_logger
from ..models import Category, FixedItem, GenerationRecord, LedgerTransaction

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractContextManager[Session]]

SNAPSHOT_VERSION = 1

# Insert order; deletes run in reverse so links go before their targets.
TABLES: dict[str, type[SQLModel]] = {
    "categories": Category,
    "transactions": LedgerTransaction,
    "fixed_items": FixedItem,
    "generations": GenerationRecord,
}


def export_state(session_factory: SessionFactory) -> dict[str, Any]:
    """Return every table as JSON-compatible records."""

    payload: dict[str, Any] = {
        "version": SNAPSHOT_VERSION,
        "exported_at": datetime.now(timezone.utc).isoformat(),
    }
    with session_factory() as session:
        for key, model in TABLES.items():
            rows = session.exec(select(model)).all()
            payload[key] = [row.model_dump(mode="json") for row in rows]
    return payload


def import_state(session_factory: SessionFactory, payload: dict[str, Any]) -> dict[str, int]:
    """Replace all stored state with ``payload``; returns row counts per table."""

    version = payload.get("version")
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported snapshot version: {version!r}")

    counts: dict[str, int] = {}
    with session_factory() as session:
        for model in reversed(list(TABLES.values())):
            for row in session.exec(select(model)).all():
                session.delete(row)
        session.flush()
        for key, model in TABLES.items():
            rows = payload.get(key, [])
            for raw in rows:
                session.add(model.model_validate(raw))
            counts[key] = len(rows)
        session.commit()
    logger.info("Snapshot imported", extra={"counts": counts})
    return counts


def write_snapshot(path: Path, session_factory: SessionFactory) -> Path:
    """Write the current state atomically (temp file + replace)."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(json.dumps(export_state(session_factory), indent=2), encoding="utf-8")
    os.replace(tmp_path, path)
    return path


def read_snapshot(path: Path, session_factory: SessionFactory) -> dict[str, int]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot not found: {path}")
    return import_state(session_factory, json.loads(path.read_text(encoding="utf-8")))


__all__ = [
    "SNAPSHOT_VERSION",
    "export_state",
    "import_state",
    "read_snapshot",
    "write_snapshot",
]

"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelFixedItemRepository,
    SQLModelGenerationLedger,
    SQLModelLedgerStore,
)
from .logging_config import get_logger
from .services import snapshot
from .services.reconciliation import ReconciliationEngine
from .services.registry import FixedItemRegistry

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Centralized application context with stores and engines."""

    config: BaseConfig
    engine: object
    session_factory: Callable[[], Session]

    ledger: SQLModelLedgerStore
    categories: SQLModelCategoryRepository

    income_engine: ReconciliationEngine
    expense_engine: ReconciliationEngine
    incomes: FixedItemRegistry
    expenses: FixedItemRegistry

    mutation_listeners: list[Callable[[], None]] = field(default_factory=list)

    def engine_for(self, kind: str) -> ReconciliationEngine:
        if kind == "income":
            return self.income_engine
        if kind == "expense":
            return self.expense_engine
        raise ValueError(f"Unknown fixed item kind: {kind!r}")

    def registry_for(self, kind: str) -> FixedItemRegistry:
        if kind == "income":
            return self.incomes
        if kind == "expense":
            return self.expenses
        raise ValueError(f"Unknown fixed item kind: {kind!r}")

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Run ``listener`` after every committed mutation."""
        self.mutation_listeners.append(listener)

    def notify_mutation(self) -> None:
        for listener in list(self.mutation_listeners):
            listener()


def _build_engines(session_factory, ledger: SQLModelLedgerStore):
    built = {}
    for kind in ("income", "expense"):
        items = SQLModelFixedItemRepository(session_factory, kind=kind)
        generations = SQLModelGenerationLedger(session_factory, kind=kind)
        engine = ReconciliationEngine(items, generations, ledger, kind=kind)
        built[kind] = (engine, FixedItemRegistry(items, engine))
    return built


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    db_engine = create_db_engine(config)
    init_database(db_engine)

    # The factory needs the context's listeners, which exist only once the
    # context does; the closure resolves them lazily.
    holder: dict[str, AppContext] = {}

    def _on_mutation() -> None:
        ctx = holder.get("ctx")
        if ctx is not None:
            ctx.notify_mutation()

    session_factory = create_session_factory(db_engine, on_mutation=_on_mutation)

    ledger = SQLModelLedgerStore(session_factory)
    categories = SQLModelCategoryRepository(session_factory)
    built = _build_engines(session_factory, ledger)

    ctx = AppContext(
        config=config,
        engine=db_engine,
        session_factory=session_factory,
        ledger=ledger,
        categories=categories,
        income_engine=built["income"][0],
        expense_engine=built["expense"][0],
        incomes=built["income"][1],
        expenses=built["expense"][1],
    )

    snapshot_file = config.SNAPSHOT_FILE
    if snapshot_file is not None:
        if snapshot_file.exists():
            snapshot.read_snapshot(snapshot_file, session_factory)
            logger.info("Loaded state snapshot", extra={"path": str(snapshot_file)})
        ctx.subscribe(lambda: snapshot.write_snapshot(snapshot_file, session_factory))

    holder["ctx"] = ctx
    return ctx

"""Database infrastructure: engine, schema and session factory."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig

MutationHook = Callable[[], None]


def create_db_engine(config: BaseConfig):
    """Create SQLModel engine from configuration."""
    engine_options = config.sqlalchemy_engine_options()
    return create_engine(config.DATABASE_URL, **engine_options)


def init_database(engine) -> None:
    """Initialize database schema."""
    # Import all models to ensure they're registered
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def _watch_mutations(session: Session) -> Callable[[], bool]:
    """Track whether ``session`` committed any flushed change.

    Returns a callable reporting the flag once the session is done.
    """
    state = {"pending": False, "committed": False}

    def _flushed(sess, flush_context) -> None:
        state["pending"] = True

    def _committed(sess) -> None:
        if state["pending"]:
            state["committed"] = True
        state["pending"] = False

    def _rolled_back(sess) -> None:
        state["pending"] = False

    event.listen(session, "after_flush", _flushed)
    event.listen(session, "after_commit", _committed)
    event.listen(session, "after_rollback", _rolled_back)
    return lambda: state["committed"]


def create_session_factory(engine, on_mutation: Optional[MutationHook] = None):
    """Create a session factory function.

    ``on_mutation`` runs synchronously after a session that wrote something
    has committed and closed, so a persistence wrapper can flush state.
    """

    @contextmanager
    def factory() -> Iterator[Session]:
        """Create a new session."""
        session = Session(engine, expire_on_commit=False)
        mutated = _watch_mutations(session)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
        if on_mutation is not None and mutated():
            on_mutation()

    return factory


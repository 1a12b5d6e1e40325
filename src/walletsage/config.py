"""Application configuration objects and helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_log_level(name: str, default: str = "INFO") -> int:
    """Resolve a level name such as ``DEBUG`` to its numeric value."""

    value = os.getenv(name, default).strip().upper()
    level = logging.getLevelName(value)
    if not isinstance(level, int):
        raise ValueError(f"{name} must be a logging level name, got {value!r}")
    return level


class BaseConfig:
    """Base configuration shared across environments."""

    DB_FILENAME = "walletsage.db"
    ENV_PREFIX = "WALLETSAGE_"

    def __init__(self, data_dir: Optional[str | Path] = None) -> None:
        self.DEV_MODE = _env_bool(f"{self.ENV_PREFIX}DEV_MODE", default=True)
        self.LOG_LEVEL = _env_log_level(f"{self.ENV_PREFIX}LOG_LEVEL")
        self.DATA_DIR = self._resolve_data_dir(data_dir)
        self.DATABASE_URL = os.getenv(f"{self.ENV_PREFIX}DATABASE_URL", self._build_sqlite_url())
        snapshot = os.getenv(f"{self.ENV_PREFIX}SNAPSHOT_FILE")
        self.SNAPSHOT_FILE: Path | None = Path(snapshot).expanduser() if snapshot else None

    def _resolve_data_dir(self, override: Optional[str | Path]) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = override or os.getenv(f"{self.ENV_PREFIX}DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        return {"connect_args": {"check_same_thread": False}}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """In-memory database for tests and throwaway sessions."""

    __test__ = False  # keep pytest from collecting this class

    DEBUG = True
    TESTING = True

    def _build_sqlite_url(self) -> str:
        return "sqlite://"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        from sqlalchemy.pool import StaticPool

        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}

"""Structured logging: a console stream plus a rotating JSON log per data dir.

Engine and registry code log through ``get_logger(__name__)`` and attach
context with ``extra={...}``; the JSON file keeps that context as an
``extra`` object so reconciliation runs can be traced item by item.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import BaseConfig

ROOT_LOGGER_NAME = "walletsage"
LOG_FILENAME = "walletsage.log"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3

_DEV_CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(levelname)s %(message)s"

# Everything a bare LogRecord carries; the rest came in through ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with caller context under ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info),
            }

        extra = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if extra:
            entry["extra"] = extra
        return json.dumps(entry, default=str)


def _console_handler(config: BaseConfig) -> logging.Handler:
    handler = logging.StreamHandler()
    if config.DEV_MODE:
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(_DEV_CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    else:
        # only problems reach the terminal; the file keeps the full record
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach console and file handlers to the ``walletsage`` logger.

    Calling it again (one call per CLI invocation, or per test) replaces the
    previous handlers instead of stacking them.
    """

    log_file = Path(config.DATA_DIR) / "logs" / LOG_FILENAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(config.LOG_LEVEL)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.addHandler(_console_handler(config))
    package_logger.addHandler(_file_handler(log_file))

    package_logger.info(
        "Logging initialized",
        extra={"log_file": str(log_file), "level": logging.getLevelName(config.LOG_LEVEL)},
    )
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Logger under ``walletsage``; module ``__name__`` values pass through."""

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

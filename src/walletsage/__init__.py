"""WalletSage: fixed income/expense tracking on top of a simple ledger."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, TestConfig
from .context import AppContext, create_app_context

__all__ = ["AppContext", "BaseConfig", "DevConfig", "TestConfig", "create_app_context"]

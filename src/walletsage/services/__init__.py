"""Service module exports."""

from . import ledger_service, periods, reconciliation, registry, snapshot, status

__all__ = [
    "ledger_service",
    "periods",
    "reconciliation",
    "registry",
    "snapshot",
    "status",
]

"""Service module exports."""

from . import (
    balances,
    directory,
    export_csv,
    ledger_service,
    monthly,
    reports,
    splits,
)

__all__ = [
    "balances",
    "directory",
    "export_csv",
    "ledger_service",
    "monthly",
    "reports",
    "splits",
]

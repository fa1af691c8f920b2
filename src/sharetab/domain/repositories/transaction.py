"""Transaction repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from ...models.transaction import Transaction
from ..updates import TransactionUpdate


@runtime_checkable
class TransactionRepository(Protocol):
    """Repository for managing transaction entities."""

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        ...

    def list_all(self) -> list[Transaction]:
        """List all transactions."""
        ...

    def list_by_group(self, group_id: str) -> list[Transaction]:
        """Get all transactions of a group."""
        ...

    def list_by_card(self, card_id: str) -> list[Transaction]:
        """Get all transactions charged to a card."""
        ...

    def list_by_date_range(self, start_date: datetime, end_date: datetime) -> list[Transaction]:
        """Get transactions within [start_date, end_date)."""
        ...

    def create(self, transaction: Transaction) -> Transaction:
        """Create a new transaction with a generated id."""
        ...

    def update(self, transaction_id: str, changes: TransactionUpdate) -> Transaction:
        """Apply changes to an existing transaction and re-stamp updated_at."""
        ...

    def delete(self, transaction_id: str) -> None:
        """Delete a transaction together with its payments."""
        ...

"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import select

from ...domain.updates import TransactionUpdate
from ...errors import NotFoundError
from ...models.transaction import Transaction, dump_splits
from ...models.types import new_id, now
from ...money import to_decimal
from ..database import SessionFactory
from .cascade import CascadePlan, execute_plan, plan_transaction_delete


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        with self.session_factory() as session:
            obj = session.get(Transaction, transaction_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Transaction]:
        """List all transactions, newest first."""
        with self.session_factory() as session:
            statement = select(Transaction).order_by(Transaction.date.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_by_group(self, group_id: str) -> list[Transaction]:
        """Get all transactions of a group."""
        with self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.group_id == group_id)
                .order_by(Transaction.date.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_by_card(self, card_id: str) -> list[Transaction]:
        """Get all transactions charged to a card."""
        with self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.card_id == card_id)
                .order_by(Transaction.date.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_by_date_range(self, start_date: datetime, end_date: datetime) -> list[Transaction]:
        """Get transactions within [start_date, end_date)."""
        with self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.date >= start_date)
                .where(Transaction.date < end_date)  # Exclusive end boundary
                .order_by(Transaction.date.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, transaction: Transaction) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            stamp = now()
            transaction.id = new_id()
            transaction.total_amount = to_decimal(transaction.total_amount, field="total_amount")
            transaction.tags = list(transaction.tags or [])
            transaction.created_at = stamp
            transaction.updated_at = stamp
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def update(self, transaction_id: str, changes: TransactionUpdate) -> Transaction:
        """Update an existing transaction."""
        with self.session_factory() as session:
            transaction = session.get(Transaction, transaction_id)
            if transaction is None:
                raise NotFoundError("Transaction", transaction_id)
            for name, value in changes.changes().items():
                if name == "splits":
                    value = dump_splits(value)
                elif name == "total_amount":
                    value = to_decimal(value, field="total_amount")
                elif name == "tags":
                    value = list(value)
                setattr(transaction, name, value)
            transaction.updated_at = now()
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def plan_delete(self, transaction_id: str) -> CascadePlan:
        """Return what ``delete`` would remove, without removing anything."""
        with self.session_factory() as session:
            return plan_transaction_delete(session, transaction_id)

    def delete(self, transaction_id: str) -> None:
        """Delete a transaction and every payment made against it."""
        with self.session_factory() as session:
            execute_plan(session, plan_transaction_delete(session, transaction_id))

"""SQLModel implementation of Payment repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.payment import Payment
from ...models.types import new_id
from ...money import to_decimal
from ..database import SessionFactory


class SQLModelPaymentRepository:
    """SQLModel-based payment repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        """Retrieve a payment by ID."""
        with self.session_factory() as session:
            obj = session.get(Payment, payment_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Payment]:
        """List all payments in the order they were made."""
        with self.session_factory() as session:
            statement = select(Payment).order_by(Payment.paid_at)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_by_transaction(self, transaction_id: str) -> list[Payment]:
        """Get payments made against one transaction."""
        with self.session_factory() as session:
            statement = (
                select(Payment)
                .where(Payment.transaction_id == transaction_id)
                .order_by(Payment.paid_at)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_by_person(self, person_id: str) -> list[Payment]:
        """Get payments made by one person."""
        with self.session_factory() as session:
            statement = (
                select(Payment)
                .where(Payment.person_id == person_id)
                .order_by(Payment.paid_at)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_by_transactions(self, transaction_ids: list[str]) -> list[Payment]:
        """Get payments made against any of the given transactions."""
        if not transaction_ids:
            return []
        with self.session_factory() as session:
            statement = (
                select(Payment)
                .where(Payment.transaction_id.in_(transaction_ids))  # type: ignore[attr-defined]
                .order_by(Payment.paid_at)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, payment: Payment) -> Payment:
        """Record a new payment."""
        with self.session_factory() as session:
            payment.id = new_id()
            payment.amount = to_decimal(payment.amount)
            session.add(payment)
            session.commit()
            session.refresh(payment)
            session.expunge(payment)
            return payment

    def delete(self, payment_id: str) -> None:
        """Delete a payment by ID."""
        with self.session_factory() as session:
            payment = session.get(Payment, payment_id)
            if payment:
                session.delete(payment)
                session.commit()

"""SQLModel implementation of the monthly card status repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.monthly_status import MonthlyCardStatus, status_key
from ...models.types import now
from ..database import SessionFactory


class SQLModelMonthlyCardStatusRepository:
    """Paid/pending flags keyed by ``{card_id}-{year}-{month}``."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get(self, card_id: str, year: int, month: int) -> Optional[MonthlyCardStatus]:
        """Retrieve the status for a card statement month."""
        with self.session_factory() as session:
            obj = session.get(MonthlyCardStatus, status_key(card_id, year, month))
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[MonthlyCardStatus]:
        """List every stored status."""
        with self.session_factory() as session:
            statement = select(MonthlyCardStatus).order_by(
                MonthlyCardStatus.year, MonthlyCardStatus.month  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_by_card(self, card_id: str) -> list[MonthlyCardStatus]:
        """Get statuses of one card."""
        with self.session_factory() as session:
            statement = (
                select(MonthlyCardStatus)
                .where(MonthlyCardStatus.card_id == card_id)
                .order_by(MonthlyCardStatus.year, MonthlyCardStatus.month)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_by_year(self, year: int) -> list[MonthlyCardStatus]:
        """Get statuses of one year."""
        with self.session_factory() as session:
            statement = (
                select(MonthlyCardStatus)
                .where(MonthlyCardStatus.year == year)
                .order_by(MonthlyCardStatus.month)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def upsert(self, card_id: str, year: int, month: int, is_paid: bool) -> MonthlyCardStatus:
        """Insert or overwrite the status for the composite key.

        ``paid_at`` is stamped when the month becomes paid and cleared otherwise.
        """
        key = status_key(card_id, year, month)
        with self.session_factory() as session:
            status = session.get(MonthlyCardStatus, key)
            if status is None:
                status = MonthlyCardStatus(id=key, card_id=card_id, year=year, month=month)
            status.is_paid = is_paid
            status.paid_at = now() if is_paid else None
            session.add(status)
            session.commit()
            session.refresh(status)
            session.expunge(status)
            return status

"""SQLModel implementation of Card repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...domain.updates import CardUpdate
from ...errors import NotFoundError
from ...models.card import Card
from ...models.types import new_id, now
from ..database import SessionFactory


class SQLModelCardRepository:
    """SQLModel-based card repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, card_id: str) -> Optional[Card]:
        """Retrieve a card by ID."""
        with self.session_factory() as session:
            obj = session.get(Card, card_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Card]:
        """List all cards in creation order."""
        with self.session_factory() as session:
            statement = select(Card).order_by(Card.created_at)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, card: Card) -> Card:
        """Create a new card."""
        with self.session_factory() as session:
            card.id = new_id()
            card.created_at = now()
            session.add(card)
            session.commit()
            session.refresh(card)
            session.expunge(card)
            return card

    def update(self, card_id: str, changes: CardUpdate) -> Card:
        """Update an existing card."""
        with self.session_factory() as session:
            card = session.get(Card, card_id)
            if card is None:
                raise NotFoundError("Card", card_id)
            for name, value in changes.changes().items():
                setattr(card, name, value)
            session.add(card)
            session.commit()
            session.refresh(card)
            session.expunge(card)
            return card

    def delete(self, card_id: str) -> None:
        """Delete a card by ID; its transactions keep the stale card id."""
        with self.session_factory() as session:
            card = session.get(Card, card_id)
            if card:
                session.delete(card)
                session.commit()

"""Card repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ...models.card import Card
from ..updates import CardUpdate


@runtime_checkable
class CardRepository(Protocol):
    """Repository for managing card entities."""

    def get_by_id(self, card_id: str) -> Optional[Card]:
        """Retrieve a card by ID."""
        ...

    def list_all(self) -> list[Card]:
        """List all cards."""
        ...

    def create(self, card: Card) -> Card:
        """Create a new card with a generated id."""
        ...

    def update(self, card_id: str, changes: CardUpdate) -> Card:
        """Apply changes to an existing card."""
        ...

    def delete(self, card_id: str) -> None:
        """Delete a card by ID; no-op when absent."""
        ...

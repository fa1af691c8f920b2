"""Monthly card status repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ...models.monthly_status import MonthlyCardStatus


@runtime_checkable
class MonthlyCardStatusRepository(Protocol):
    """Repository for per card/month paid flags."""

    def get(self, card_id: str, year: int, month: int) -> Optional[MonthlyCardStatus]:
        """Retrieve the status for a card statement month."""
        ...

    def list_all(self) -> list[MonthlyCardStatus]:
        """List every stored status."""
        ...

    def list_by_card(self, card_id: str) -> list[MonthlyCardStatus]:
        """Get statuses of one card."""
        ...

    def list_by_year(self, year: int) -> list[MonthlyCardStatus]:
        """Get statuses of one year."""
        ...

    def upsert(self, card_id: str, year: int, month: int, is_paid: bool) -> MonthlyCardStatus:
        """Insert or overwrite the status stored under the composite key."""
        ...

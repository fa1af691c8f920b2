"""Payment repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ...models.payment import Payment


@runtime_checkable
class PaymentRepository(Protocol):
    """Repository for managing payment entities."""

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        """Retrieve a payment by ID."""
        ...

    def list_all(self) -> list[Payment]:
        """List all payments."""
        ...

    def list_by_transaction(self, transaction_id: str) -> list[Payment]:
        """Get payments made against one transaction."""
        ...

    def list_by_person(self, person_id: str) -> list[Payment]:
        """Get payments made by one person."""
        ...

    def create(self, payment: Payment) -> Payment:
        """Record a payment with a generated id."""
        ...

    def delete(self, payment_id: str) -> None:
        """Delete a payment by ID; no-op when absent."""
        ...

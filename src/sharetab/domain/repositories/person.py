"""Person repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ...models.person import Person
from ..updates import PersonUpdate


@runtime_checkable
class PersonRepository(Protocol):
    """Repository for managing person entities."""

    def get_by_id(self, person_id: str) -> Optional[Person]:
        """Retrieve a person by ID."""
        ...

    def list_all(self) -> list[Person]:
        """List all persons."""
        ...

    def create(self, person: Person) -> Person:
        """Create a new person with a generated id."""
        ...

    def update(self, person_id: str, changes: PersonUpdate) -> Person:
        """Apply changes to an existing person."""
        ...

    def delete(self, person_id: str) -> None:
        """Delete a person by ID; no-op when absent."""
        ...

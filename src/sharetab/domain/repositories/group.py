"""Group repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ...models.group import Group
from ..updates import GroupUpdate


@runtime_checkable
class GroupRepository(Protocol):
    """Repository for managing group entities."""

    def get_by_id(self, group_id: str) -> Optional[Group]:
        """Retrieve a group by ID."""
        ...

    def list_all(self) -> list[Group]:
        """List all groups."""
        ...

    def create(self, group: Group) -> Group:
        """Create a new group with a generated id."""
        ...

    def update(self, group_id: str, changes: GroupUpdate) -> Group:
        """Apply changes to an existing group and re-stamp updated_at."""
        ...

    def delete(self, group_id: str) -> None:
        """Delete a group together with its transactions and their payments."""
        ...

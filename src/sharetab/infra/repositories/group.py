"""SQLModel implementation of Group repository."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlmodel import select

from ...domain.updates import GroupUpdate
from ...errors import NotFoundError
from ...models.group import Group
from ...models.types import new_id, now
from ..database import SessionFactory
from .cascade import CascadePlan, execute_plan, plan_group_delete


def unique_ids(ids: Iterable[str]) -> list[str]:
    """De-duplicate while keeping first-seen order."""
    return list(dict.fromkeys(ids))


class SQLModelGroupRepository:
    """SQLModel-based group repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, group_id: str) -> Optional[Group]:
        """Retrieve a group by ID."""
        with self.session_factory() as session:
            obj = session.get(Group, group_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Group]:
        """List all groups, most recently created first."""
        with self.session_factory() as session:
            statement = select(Group).order_by(Group.created_at.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, group: Group) -> Group:
        """Create a new group."""
        with self.session_factory() as session:
            stamp = now()
            group.id = new_id()
            group.person_ids = unique_ids(group.person_ids or [])
            group.created_at = stamp
            group.updated_at = stamp
            session.add(group)
            session.commit()
            session.refresh(group)
            session.expunge(group)
            return group

    def update(self, group_id: str, changes: GroupUpdate) -> Group:
        """Update an existing group."""
        with self.session_factory() as session:
            group = session.get(Group, group_id)
            if group is None:
                raise NotFoundError("Group", group_id)
            for name, value in changes.changes().items():
                if name == "person_ids":
                    value = unique_ids(value)
                setattr(group, name, value)
            group.updated_at = now()
            session.add(group)
            session.commit()
            session.refresh(group)
            session.expunge(group)
            return group

    def plan_delete(self, group_id: str) -> CascadePlan:
        """Return what ``delete`` would remove, without removing anything."""
        with self.session_factory() as session:
            return plan_group_delete(session, group_id)

    def delete(self, group_id: str) -> None:
        """Delete a group with all of its transactions and their payments."""
        with self.session_factory() as session:
            execute_plan(session, plan_group_delete(session, group_id))

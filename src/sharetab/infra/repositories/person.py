"""SQLModel implementation of Person repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...domain.updates import PersonUpdate
from ...errors import NotFoundError
from ...models.person import Person
from ...models.types import new_id, now
from ..database import SessionFactory


class SQLModelPersonRepository:
    """SQLModel-based person repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, person_id: str) -> Optional[Person]:
        """Retrieve a person by ID."""
        with self.session_factory() as session:
            obj = session.get(Person, person_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Person]:
        """List all persons ordered by name."""
        with self.session_factory() as session:
            statement = select(Person).order_by(Person.name)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, person: Person) -> Person:
        """Create a new person."""
        with self.session_factory() as session:
            person.id = new_id()
            person.created_at = now()
            session.add(person)
            session.commit()
            session.refresh(person)
            session.expunge(person)
            return person

    def update(self, person_id: str, changes: PersonUpdate) -> Person:
        """Update an existing person."""
        with self.session_factory() as session:
            person = session.get(Person, person_id)
            if person is None:
                raise NotFoundError("Person", person_id)
            for name, value in changes.changes().items():
                setattr(person, name, value)
            session.add(person)
            session.commit()
            session.refresh(person)
            session.expunge(person)
            return person

    def delete(self, person_id: str) -> None:
        """Delete a person by ID. Splits and payments that mention them are kept."""
        with self.session_factory() as session:
            person = session.get(Person, person_id)
            if person:
                session.delete(person)
                session.commit()

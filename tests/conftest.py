"""Pytest configuration and shared fixtures for sharetab tests.

This module provides database fixtures, an entity store handle and test data
factories for testing services and repositories without touching a real data
directory.
"""

from __future__ import annotations

import tempfile
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from sharetab.config import BaseConfig
from sharetab.infra.store import EntityStore
from sharetab.models import Card, Group, Payment, Person, Transaction, dump_splits
from sharetab.services.splits import calculate_splits

# =============================================================================
# Configuration & Database Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path, monkeypatch) -> BaseConfig:
    """Configuration rooted in a per-test data directory."""

    monkeypatch.setenv("SHARETAB_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("SHARETAB_DATABASE_URL", raising=False)
    monkeypatch.delenv("SHARETAB_STRICT_REFERENCES", raising=False)
    monkeypatch.setenv("SHARETAB_DEV_MODE", "false")
    return BaseConfig()


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )

    # Import models so every table is registered before create_all
    import sharetab.models  # noqa: F401

    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Raw session for assertions that bypass the repositories."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db_engine, config) -> EntityStore:
    """Entity store over the per-test database."""
    return EntityStore.from_engine(db_engine, config)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def person_factory(store):
    """Factory for creating test persons."""

    def _create_person(name: str = "Ana") -> Person:
        return store.persons.create(Person(name=name))

    return _create_person


@pytest.fixture
def card_factory(store):
    """Factory for creating test cards."""

    def _create_card(name: str = "Nubank", card_type: str = "credit", color: str = "#8b5cf6") -> Card:
        return store.cards.create(Card(name=name, type=card_type, color=color))

    return _create_card


@pytest.fixture
def group_factory(store):
    """Factory for creating test groups.

    Returns:
        Callable: Function that creates and persists Group instances
    """

    def _create_group(name: str = "Viagem", person_ids: list[str] | None = None) -> Group:
        return store.groups.create(Group(name=name, person_ids=list(person_ids or [])))

    return _create_group


@pytest.fixture
def transaction_factory(store):
    """Factory for creating test transactions with equal splits.

    Returns:
        Callable: Function that creates and persists Transaction instances
    """

    def _create_transaction(
        group_id: str,
        total_amount: Decimal | str | int = "100",
        participants: list[dict] | None = None,
        paid_by_person_id: str | None = None,
        card_id: str | None = None,
        date: datetime | None = None,
        description: str = "Jantar",
        tags: list[str] | None = None,
    ) -> Transaction:
        """Create a transaction; ``participants`` default to every group member.

        Args:
            group_id: Owning group
            total_amount: Transaction total
            participants: Split editor rows (person_id, is_included, fixed_amount)
            paid_by_person_id: Payer (defaults to the first participant)
            card_id: Card charged, or None for no card
            date: Transaction date (defaults to 2024-03-10)
        """
        if participants is None:
            group = store.groups.get_by_id(group_id)
            participants = [{"person_id": pid} for pid in group.person_ids]
        payer = paid_by_person_id or (participants[0]["person_id"] if participants else "nobody")
        transaction = Transaction(
            group_id=group_id,
            card_id=card_id,
            description=description,
            total_amount=Decimal(str(total_amount)),
            date=date or datetime(2024, 3, 10, 12, 0),
            paid_by_person_id=payer,
            splits=dump_splits(calculate_splits(total_amount, participants)),
            tags=list(tags or []),
        )
        return store.transactions.create(transaction)

    return _create_transaction


@pytest.fixture
def payment_factory(store):
    """Factory for creating test payments."""

    def _create_payment(
        transaction_id: str,
        person_id: str,
        amount: Decimal | str | int = "10",
        paid_at: datetime | None = None,
    ) -> Payment:
        return store.payments.create(
            Payment(
                transaction_id=transaction_id,
                person_id=person_id,
                amount=Decimal(str(amount)),
                paid_at=paid_at or datetime(2024, 3, 12, 9, 0),
            )
        )

    return _create_payment


@pytest.fixture
def trio(person_factory, group_factory):
    """Three people sharing one group: returns (group, ana, bruno, carla)."""

    ana = person_factory("Ana")
    bruno = person_factory("Bruno")
    carla = person_factory("Carla")
    group = group_factory("Viagem", [ana.id, bruno.id, carla.id])
    return group, ana, bruno, carla


# =============================================================================
# Helper Functions
# =============================================================================


def assert_decimal_equal(actual, expected, places: int = 2):
    """Assert two monetary values match to ``places`` decimal places."""

    quantum = Decimal(1).scaleb(-places)
    actual_q = Decimal(str(actual)).quantize(quantum)
    expected_q = Decimal(str(expected)).quantize(quantum)
    assert actual_q == expected_q, f"Expected {expected_q}, got {actual_q}"

"""The entity store handle: opened once, passed to every service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from ..config import BaseConfig
from ..logging_config import get_logger
from .database import SessionFactory, create_db_engine, create_session_factory, init_database
from .repositories import (
    SQLModelCardRepository,
    SQLModelGroupRepository,
    SQLModelMonthlyCardStatusRepository,
    SQLModelPaymentRepository,
    SQLModelPersonRepository,
    SQLModelTransactionRepository,
)

logger = get_logger(__name__)


@dataclass
class EntityStore:
    """Centralized handle over the engine, session factory and repositories."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory

    persons: SQLModelPersonRepository
    cards: SQLModelCardRepository
    groups: SQLModelGroupRepository
    transactions: SQLModelTransactionRepository
    payments: SQLModelPaymentRepository
    statuses: SQLModelMonthlyCardStatusRepository

    @classmethod
    def from_engine(cls, engine: Engine, config: BaseConfig) -> "EntityStore":
        """Build repositories over an existing, already initialised engine."""

        session_factory = create_session_factory(engine)
        return cls(
            config=config,
            engine=engine,
            session_factory=session_factory,
            persons=SQLModelPersonRepository(session_factory),
            cards=SQLModelCardRepository(session_factory),
            groups=SQLModelGroupRepository(session_factory),
            transactions=SQLModelTransactionRepository(session_factory),
            payments=SQLModelPaymentRepository(session_factory),
            statuses=SQLModelMonthlyCardStatusRepository(session_factory),
        )

    def close(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    def __enter__(self) -> "EntityStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def open_store(config: Optional[BaseConfig] = None) -> EntityStore:
    """Create the engine, make sure the schema exists and return the store."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    logger.info("Entity store opened", extra={"database_url": config.DATABASE_URL})
    return EntityStore.from_engine(engine, config)

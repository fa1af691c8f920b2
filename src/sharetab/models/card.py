"""Cards and accounts that transactions are charged to."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from .types import UTCDateTime, new_id, now

NO_CARD = "no-card"


class CardType(str, Enum):
    """Supported payment instruments."""

    CREDIT = "credit"
    DEBIT = "debit"
    ACCOUNT = "account"


class Card(SQLModel, table=True):
    """A credit card, debit card or bank account."""

    __tablename__: ClassVar[str] = "card"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str = Field(nullable=False, max_length=128, index=True)
    type: str = Field(default=CardType.CREDIT.value, nullable=False, max_length=16)
    color: str = Field(default="#10b981", max_length=7)
    created_at: datetime = Field(default_factory=now, sa_column=Column(UTCDateTime(), nullable=False))

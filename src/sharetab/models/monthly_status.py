"""Paid/pending flag for one card statement month."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from .types import UTCDateTime


def status_key(card_id: str, year: int, month: int) -> str:
    """Deterministic primary key ``{card_id}-{year}-{month}``; month is 0-based."""
    return f"{card_id}-{year}-{month}"


class MonthlyCardStatus(SQLModel, table=True):
    """Whether a card's statement for a given month has been settled.

    ``card_id`` may be the ``no-card`` sentinel, so it is not a foreign key.
    Records are created lazily on first toggle and never deleted.
    """

    __tablename__: ClassVar[str] = "monthly_card_status"

    id: str = Field(primary_key=True, max_length=64)
    card_id: str = Field(nullable=False, index=True, max_length=36)
    year: int = Field(nullable=False, index=True)
    month: int = Field(nullable=False, ge=0, le=11)
    is_paid: bool = Field(default=False, nullable=False)
    paid_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime(), nullable=True))

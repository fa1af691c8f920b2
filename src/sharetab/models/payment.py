"""Payments settling a person's share of a transaction."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from ..money import ZERO
from .types import DecimalText, UTCDateTime, new_id, now


class Payment(SQLModel, table=True):
    """Partial or full settlement. Overpayment is allowed and kept as-is."""

    __tablename__: ClassVar[str] = "payment"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    transaction_id: str = Field(foreign_key="transaction.id", nullable=False, index=True)
    person_id: str = Field(nullable=False, index=True, max_length=36)
    amount: Decimal = Field(default=ZERO, sa_column=Column(DecimalText(), nullable=False))
    paid_at: datetime = Field(default_factory=now, sa_column=Column(UTCDateTime(), nullable=False))

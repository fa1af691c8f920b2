"""SQLModel definitions for shared-expense transactions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Iterable, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from ..money import ZERO, to_decimal
from .types import DecimalText, UTCDateTime, new_id, now


@dataclass(slots=True)
class PersonSplit:
    """One participant's share of a transaction.

    Embedded in the transaction row; never stored on its own.
    """

    person_id: str
    is_included: bool
    calculated_amount: Decimal = ZERO
    fixed_amount: Optional[Decimal] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "person_id": self.person_id,
            "is_included": self.is_included,
            "fixed_amount": None if self.fixed_amount is None else str(self.fixed_amount),
            "calculated_amount": str(self.calculated_amount),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PersonSplit":
        fixed = data.get("fixed_amount")
        return cls(
            person_id=data["person_id"],
            is_included=bool(data.get("is_included", False)),
            calculated_amount=to_decimal(data.get("calculated_amount")),
            fixed_amount=None if fixed in (None, "") else to_decimal(fixed),
        )


def dump_splits(splits: Iterable[PersonSplit]) -> list[dict[str, Any]]:
    """Serialize splits for the JSON column, preserving order."""
    return [split.to_dict() for split in splits]


class Transaction(SQLModel, table=True):
    """A single shared expense paid by one person and split across a group."""

    __tablename__: ClassVar[str] = "transaction"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    group_id: str = Field(foreign_key="expense_group.id", nullable=False, index=True)
    # no FK: card deletion leaves historic transactions pointing at the old id
    card_id: Optional[str] = Field(default=None, index=True, max_length=36)
    description: str = Field(default="", max_length=255)
    total_amount: Decimal = Field(default=ZERO, sa_column=Column(DecimalText(), nullable=False))
    date: datetime = Field(default_factory=now, sa_column=Column(UTCDateTime(), nullable=False, index=True))
    paid_by_person_id: str = Field(nullable=False, max_length=36)
    splits: list[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=now, sa_column=Column(UTCDateTime(), nullable=False))
    updated_at: datetime = Field(default_factory=now, sa_column=Column(UTCDateTime(), nullable=False))

    def person_splits(self) -> list[PersonSplit]:
        """Return the embedded splits as typed values, in stored order."""
        return [PersonSplit.from_dict(raw) for raw in self.splits or []]

    def replace_splits(self, splits: Iterable[PersonSplit]) -> None:
        # assign a fresh list; in-place JSON mutation is not change-tracked
        self.splits = dump_splits(splits)

    def included_splits(self) -> list[PersonSplit]:
        return [split for split in self.person_splits() if split.is_included]

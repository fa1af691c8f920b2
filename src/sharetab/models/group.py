"""Expense groups."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from .types import UTCDateTime, new_id, now


class Group(SQLModel, table=True):
    """A named set of people sharing expenses (a trip, a flat, a dinner club)."""

    __tablename__: ClassVar[str] = "expense_group"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str = Field(nullable=False, max_length=128, index=True)
    description: Optional[str] = Field(default=None, max_length=400)
    color: str = Field(default="#10b981", max_length=7)
    icon: str = Field(default="🏖️", max_length=16)
    # set semantics; kept de-duplicated on write
    person_ids: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=now, sa_column=Column(UTCDateTime(), nullable=False))
    updated_at: datetime = Field(default_factory=now, sa_column=Column(UTCDateTime(), nullable=False))

    def has_member(self, person_id: str) -> bool:
        return person_id in self.person_ids

"""People who take part in shared expenses."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from .types import UTCDateTime, new_id, now


class Person(SQLModel, table=True):
    __tablename__: ClassVar[str] = "person"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str = Field(nullable=False, max_length=128, index=True)
    created_at: datetime = Field(default_factory=now, sa_column=Column(UTCDateTime(), nullable=False))

"""Typed update requests: the exact set of mutable fields per entity.

A field left as ``None`` is not touched. Fields that may legitimately be
cleared (``Group.description``, ``Transaction.card_id``) use the ``UNSET``
sentinel as their default instead, so ``None`` means "clear it".
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..models.transaction import PersonSplit


class _Unset:
    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class _Update:
    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller actually set."""

        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is UNSET:
                continue
            if value is None and f.default is None:
                continue
            result[f.name] = value
        return result


@dataclass
class PersonUpdate(_Update):
    name: Optional[str] = None


@dataclass
class CardUpdate(_Update):
    name: Optional[str] = None
    type: Optional[str] = None
    color: Optional[str] = None


@dataclass
class GroupUpdate(_Update):
    name: Optional[str] = None
    description: Any = UNSET
    color: Optional[str] = None
    icon: Optional[str] = None
    person_ids: Optional[list[str]] = None


@dataclass
class TransactionUpdate(_Update):
    description: Optional[str] = None
    card_id: Any = UNSET
    total_amount: Optional[Decimal] = None
    date: Optional[datetime] = None
    paid_by_person_id: Optional[str] = None
    splits: Optional[list[PersonSplit]] = None
    tags: Optional[list[str]] = None

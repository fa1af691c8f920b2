"""SQLModel table exports."""

from .card import NO_CARD, Card, CardType
from .group import Group
from .monthly_status import MonthlyCardStatus, status_key
from .payment import Payment
from .person import Person
from .transaction import PersonSplit, Transaction, dump_splits

__all__ = [
    "Card",
    "CardType",
    "Group",
    "MonthlyCardStatus",
    "NO_CARD",
    "Payment",
    "Person",
    "PersonSplit",
    "Transaction",
    "dump_splits",
    "status_key",
]

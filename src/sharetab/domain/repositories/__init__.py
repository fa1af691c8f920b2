"""Repository protocol definitions for domain layer."""

from .card import CardRepository
from .group import GroupRepository
from .monthly_status import MonthlyCardStatusRepository
from .payment import PaymentRepository
from .person import PersonRepository
from .transaction import TransactionRepository

__all__ = [
    "CardRepository",
    "GroupRepository",
    "MonthlyCardStatusRepository",
    "PaymentRepository",
    "PersonRepository",
    "TransactionRepository",
]

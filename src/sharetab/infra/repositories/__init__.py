"""Concrete repository implementations using SQLModel."""

from .card import SQLModelCardRepository
from .cascade import CascadePlan
from .group import SQLModelGroupRepository
from .monthly_status import SQLModelMonthlyCardStatusRepository
from .payment import SQLModelPaymentRepository
from .person import SQLModelPersonRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "CascadePlan",
    "SQLModelCardRepository",
    "SQLModelGroupRepository",
    "SQLModelMonthlyCardStatusRepository",
    "SQLModelPaymentRepository",
    "SQLModelPersonRepository",
    "SQLModelTransactionRepository",
]

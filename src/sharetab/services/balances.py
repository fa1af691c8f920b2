"""Owed-versus-paid reconciliation per person and per transaction."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional

from ..models.payment import Payment
from ..models.transaction import Transaction
from ..money import ZERO

if TYPE_CHECKING:  # pragma: no cover
    from ..infra.store import EntityStore


class BalanceState(str, Enum):
    OWING = "owing"
    PAID_UP = "paid_up"
    NOTHING_DUE = "nothing_due"


@dataclass(slots=True)
class PersonBalance:
    """What one person owes across a set of transactions and what they have paid."""

    person_id: str
    owed: Decimal = ZERO
    paid: Decimal = ZERO

    @property
    def remaining(self) -> Decimal:
        return max(ZERO, self.owed - self.paid)

    @property
    def is_paid_up(self) -> bool:
        # owing nothing because nothing was ever due is not "paid up"
        return self.remaining == 0 and self.owed > 0

    @property
    def state(self) -> BalanceState:
        if self.remaining > 0:
            return BalanceState.OWING
        if self.owed > 0:
            return BalanceState.PAID_UP
        return BalanceState.NOTHING_DUE


def reconcile(
    transactions: Iterable[Transaction],
    payments: Iterable[Payment],
    person_ids: Optional[Iterable[str]] = None,
) -> dict[str, PersonBalance]:
    """Aggregate owed (included splits) and paid (payments) per person.

    Payments count for the person who made them no matter which transaction
    they target. With ``person_ids`` every listed person gets a balance, even a
    zero one, and nobody else is reported.
    """

    restricted = person_ids is not None
    balances: dict[str, PersonBalance] = {}
    if restricted:
        for person_id in person_ids:
            balances[person_id] = PersonBalance(person_id=person_id)

    def _balance(person_id: str) -> Optional[PersonBalance]:
        if person_id not in balances:
            if restricted:
                return None
            balances[person_id] = PersonBalance(person_id=person_id)
        return balances[person_id]

    for transaction in transactions:
        for split in transaction.included_splits():
            balance = _balance(split.person_id)
            if balance is not None:
                balance.owed += split.calculated_amount

    for payment in payments:
        balance = _balance(payment.person_id)
        if balance is not None:
            balance.paid += payment.amount

    return balances


def transaction_paid_total(transaction: Transaction, payments: Iterable[Payment]) -> Decimal:
    """Sum of payments made against ``transaction``."""
    return sum((p.amount for p in payments if p.transaction_id == transaction.id), ZERO)


def transaction_is_paid_up(transaction: Transaction, payments: Iterable[Payment]) -> bool:
    """Total-versus-total check; ignores who paid."""
    return transaction_paid_total(transaction, payments) >= transaction.total_amount


@dataclass
class TransactionDebts:
    """Per-person view of a single transaction, as shown when managing its payments."""

    transaction_id: str
    balances: dict[str, PersonBalance] = field(default_factory=dict)

    @property
    def total_owed(self) -> Decimal:
        return sum((b.owed for b in self.balances.values()), ZERO)

    @property
    def total_paid(self) -> Decimal:
        return sum((b.paid for b in self.balances.values()), ZERO)

    @property
    def is_paid_up(self) -> bool:
        return self.total_paid >= self.total_owed


def transaction_debts(transaction: Transaction, payments: Iterable[Payment]) -> TransactionDebts:
    """Owed/paid for each included participant of one transaction.

    Payments by people without an included split are ignored here.
    """

    included = [split.person_id for split in transaction.included_splits()]
    relevant = [p for p in payments if p.transaction_id == transaction.id]
    return TransactionDebts(
        transaction_id=transaction.id,
        balances=reconcile([transaction], relevant, person_ids=included),
    )


def group_balances(store: "EntityStore", group_id: str) -> dict[str, PersonBalance]:
    """Balances for every member of a group over that group's transactions only."""

    group = store.groups.get_by_id(group_id)
    transactions = store.transactions.list_by_group(group_id)
    payments = store.payments.list_by_transactions([t.id for t in transactions])
    members = group.person_ids if group is not None else None
    return reconcile(transactions, payments, person_ids=members)

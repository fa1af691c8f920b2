"""Group summaries and chart series for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from ..errors import NotFoundError
from ..models.transaction import Transaction
from ..money import MONTH_LABELS, ZERO, format_currency
from .balances import PersonBalance, group_balances

if TYPE_CHECKING:  # pragma: no cover
    from ..infra.store import EntityStore


@dataclass
class GroupSummary:
    group_id: str
    name: str
    total_amount: Decimal = ZERO
    transaction_count: int = 0
    balances: dict[str, PersonBalance] = field(default_factory=dict)
    currency: str = "BRL"

    @property
    def outstanding(self) -> Decimal:
        """Sum of what members still owe."""
        return sum((b.remaining for b in self.balances.values()), ZERO)

    def formatted_total(self) -> str:
        return format_currency(self.total_amount, self.currency)

    def formatted_outstanding(self) -> str:
        return format_currency(self.outstanding, self.currency)


def group_summary(store: "EntityStore", group_id: str) -> GroupSummary:
    """Totals and per-member balances for one group."""

    group = store.groups.get_by_id(group_id)
    if group is None:
        raise NotFoundError("Group", group_id)
    transactions = store.transactions.list_by_group(group_id)
    return GroupSummary(
        group_id=group.id,
        name=group.name,
        total_amount=sum((t.total_amount for t in transactions), ZERO),
        transaction_count=len(transactions),
        balances=group_balances(store, group_id),
        currency=store.config.CURRENCY,
    )


@dataclass(frozen=True)
class ChartPoint:
    year: int
    month: int  # 1-based
    total: Decimal

    @property
    def label(self) -> str:
        return f"{MONTH_LABELS[self.month - 1]}/{self.year % 100:02d}"


def _previous_months(today: date, months: int) -> list[tuple[int, int]]:
    year, month = today.year, today.month
    keys = []
    for _ in range(months):
        keys.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


def monthly_chart_series(
    transactions: Iterable[Transaction], months: int = 6, today: Optional[date] = None
) -> list[ChartPoint]:
    """Spending per calendar month for the last ``months`` months, oldest first.

    Months without transactions are reported with a zero total.
    """

    if months < 1:
        raise ValueError("months must be at least 1")
    keys = _previous_months(today or date.today(), months)
    totals: dict[tuple[int, int], Decimal] = {key: ZERO for key in keys}
    for transaction in transactions:
        key = (transaction.date.year, transaction.date.month)
        if key in totals:
            totals[key] += transaction.total_amount
    return [ChartPoint(year=y, month=m, total=totals[(y, m)]) for y, m in keys]

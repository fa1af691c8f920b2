"""Per-card, per-month ledger with paid/pending statement flags."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional

from ..errors import ValidationError
from ..logging_config import get_logger
from ..models.card import NO_CARD, Card
from ..models.monthly_status import MonthlyCardStatus
from ..models.transaction import Transaction
from ..money import ZERO, format_month_year

if TYPE_CHECKING:  # pragma: no cover
    from ..infra.store import EntityStore

logger = get_logger(__name__)

MONTHS_PER_YEAR = 12


class StatusFilter(str, Enum):
    ALL = "all"
    PAID = "paid"
    PENDING = "pending"


def normalize_filter_value(raw_value: Optional[str]) -> Optional[str]:
    """Return a nullable id, treating falsy/'all' as no filter."""

    if not raw_value:
        return None
    if raw_value.strip().lower() in {"all", "any"}:
        return None
    return raw_value.strip()


@dataclass
class MonthlyFilters:
    """Filters applied to the monthly table. ``None`` means "all"."""

    card_id: Optional[str] = None
    group_id: Optional[str] = None
    person_id: Optional[str] = None
    status: StatusFilter = StatusFilter.ALL

    @classmethod
    def from_raw(
        cls,
        *,
        card_id: Optional[str] = None,
        group_id: Optional[str] = None,
        person_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> "MonthlyFilters":
        """Build filters from select-box values where ``"all"`` means unset."""
        try:
            status_filter = StatusFilter((status or "all").strip().lower())
        except ValueError as exc:
            raise ValidationError(
                f"Unknown status filter: {status!r}", {"status": ["Expected all, paid or pending."]}
            ) from exc
        return cls(
            card_id=normalize_filter_value(card_id),
            group_id=normalize_filter_value(group_id),
            person_id=normalize_filter_value(person_id),
            status=status_filter,
        )


@dataclass
class MonthCell:
    card_id: str
    month: int
    total: Decimal = ZERO
    transactions: list[Transaction] = field(default_factory=list)
    status: Optional[MonthlyCardStatus] = None

    @property
    def is_paid(self) -> bool:
        return bool(self.status and self.status.is_paid)


def _empty_row(card_id: str) -> list[MonthCell]:
    return [MonthCell(card_id=card_id, month=m) for m in range(MONTHS_PER_YEAR)]


@dataclass
class MonthlyTable:
    """Cells keyed by card id (``no-card`` included) and 0-based month."""

    year: int
    filters: MonthlyFilters
    rows: dict[str, list[MonthCell]]
    known_card_ids: list[str] = field(default_factory=list)

    def cell(self, card_id: str, month: int) -> MonthCell:
        return self.rows[card_id][month]

    def cell_title(self, card_name: str, month: int) -> str:
        """Heading for a cell detail view, e.g. ``Nubank - Março 2024``."""
        return f"{card_name} - {format_month_year(month, self.year)}"

    @property
    def card_totals(self) -> dict[str, Decimal]:
        return {card_id: sum((c.total for c in cells), ZERO) for card_id, cells in self.rows.items()}

    @property
    def month_totals(self) -> list[Decimal]:
        totals = [ZERO] * MONTHS_PER_YEAR
        for cells in self.rows.values():
            for cell in cells:
                totals[cell.month] += cell.total
        return totals

    @property
    def grand_total(self) -> Decimal:
        return sum(self.month_totals, ZERO)

    def visible_card_ids(self) -> list[str]:
        """Rows to render: known cards (respecting the card filter), then data-only rows."""

        wanted = self.filters.card_id
        ids = [cid for cid in self.known_card_ids if wanted is None or cid == wanted]
        for card_id, cells in self.rows.items():
            if card_id in self.known_card_ids or card_id in ids:
                continue
            if any(c.transactions for c in cells):
                ids.append(card_id)
        return ids

    def visible_cells(self) -> list[MonthCell]:
        """Cells passing the paid/pending filter.

        Totals ignore this filter; it only hides cells from display.
        """

        status = self.filters.status
        cells: list[MonthCell] = []
        for card_id in self.visible_card_ids():
            for cell in self.rows[card_id]:
                if status is StatusFilter.PAID and not cell.is_paid:
                    continue
                if status is StatusFilter.PENDING and cell.is_paid:
                    continue
                cells.append(cell)
        return cells


def transaction_matches(transaction: Transaction, year: int, filters: MonthlyFilters) -> bool:
    """True when the transaction belongs in the table for ``year`` under ``filters``."""

    if transaction.date.year != year:
        return False
    if filters.group_id is not None and transaction.group_id != filters.group_id:
        return False
    if filters.person_id is not None and not any(
        split.person_id == filters.person_id for split in transaction.included_splits()
    ):
        return False
    card_id = transaction.card_id or NO_CARD
    if filters.card_id is not None and card_id != filters.card_id:
        return False
    return True


def build_monthly_table(
    transactions: Iterable[Transaction],
    cards: Iterable[Card],
    year: int,
    filters: Optional[MonthlyFilters] = None,
    statuses: Iterable[MonthlyCardStatus] = (),
) -> MonthlyTable:
    """Bucket transactions by (card, month) for one year and join statement statuses."""

    filters = filters or MonthlyFilters()
    known_card_ids = [card.id for card in cards]
    rows: dict[str, list[MonthCell]] = {card_id: _empty_row(card_id) for card_id in known_card_ids}
    rows.setdefault(NO_CARD, _empty_row(NO_CARD))

    for transaction in transactions:
        if not transaction_matches(transaction, year, filters):
            continue
        card_id = transaction.card_id or NO_CARD
        if card_id not in rows:
            # card was deleted but its transactions remain
            rows[card_id] = _empty_row(card_id)
        cell = rows[card_id][transaction.date.month - 1]
        cell.total += transaction.total_amount
        cell.transactions.append(transaction)

    for status in statuses:
        if status.year != year or status.card_id not in rows:
            continue
        if 0 <= status.month < MONTHS_PER_YEAR:
            rows[status.card_id][status.month].status = status

    return MonthlyTable(year=year, filters=filters, rows=rows, known_card_ids=known_card_ids)


def load_monthly_table(
    store: "EntityStore", year: int, filters: Optional[MonthlyFilters] = None
) -> MonthlyTable:
    """Build the table from the current store snapshot."""

    return build_monthly_table(
        store.transactions.list_all(),
        store.cards.list_all(),
        year,
        filters=filters,
        statuses=store.statuses.list_by_year(year),
    )


def _check_month(month: int) -> None:
    if not 0 <= month < MONTHS_PER_YEAR:
        raise ValidationError(
            f"Month must be between 0 and 11, got {month}", {"month": ["Out of range."]}
        )


def set_status(
    store: "EntityStore", card_id: str, year: int, month: int, is_paid: bool
) -> MonthlyCardStatus:
    """Mark a card statement month paid or pending.

    The record is keyed by ``{card_id}-{year}-{month}`` so repeated calls always
    touch the same single row.
    """

    _check_month(month)
    status = store.statuses.upsert(card_id or NO_CARD, year, month, is_paid)
    logger.info(
        "Monthly card status set",
        extra={"status_id": status.id, "is_paid": status.is_paid},
    )
    return status


def toggle_status(store: "EntityStore", card_id: str, year: int, month: int) -> MonthlyCardStatus:
    """Flip the paid flag of a card statement month."""

    _check_month(month)
    current = store.statuses.get(card_id or NO_CARD, year, month)
    return set_status(store, card_id, year, month, not (current and current.is_paid))


def selectable_years(today: Optional[date] = None) -> list[int]:
    """Years offered by the year picker: two back, current, one ahead."""

    current_year = (today or date.today()).year
    return [current_year - 2, current_year - 1, current_year, current_year + 1]

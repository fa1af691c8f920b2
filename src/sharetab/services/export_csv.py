"""CSV export helpers for sharetab."""

from __future__ import annotations

import csv
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from ..models.card import NO_CARD
from ..models.transaction import Transaction
from ..money import MONTH_LABELS, format_currency, quantize_cents
from .monthly import MONTHS_PER_YEAR, MonthlyTable

if TYPE_CHECKING:  # pragma: no cover
    from ..infra.store import EntityStore


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(quantize_cents(value))
    if isinstance(value, (list, tuple)):
        return ";".join(str(v) for v in value)
    return str(value)


def export_transactions_csv(
    *, transactions: Iterable[Transaction], output_path: Path, currency: str = "BRL"
) -> Path:
    """Write transactions to CSV at `output_path`.

    One row per transaction; the ``splits`` column lists included participants
    as ``person_id=amount`` pairs and ``total_display`` is the total formatted
    in ``currency``. Returns the path written.
    """

    headers = [
        "id",
        "date",
        "description",
        "total_amount",
        "total_display",
        "group_id",
        "card_id",
        "paid_by_person_id",
        "tags",
        "splits",
    ]
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for tx in transactions:
            splits = [
                f"{split.person_id}={quantize_cents(split.calculated_amount)}"
                for split in tx.included_splits()
            ]
            writer.writerow(
                {
                    "id": _serialize_value(tx.id),
                    "date": _serialize_value(tx.date),
                    "description": _serialize_value(tx.description),
                    "total_amount": _serialize_value(tx.total_amount),
                    "total_display": format_currency(tx.total_amount, currency),
                    "group_id": _serialize_value(tx.group_id),
                    "card_id": _serialize_value(tx.card_id),
                    "paid_by_person_id": _serialize_value(tx.paid_by_person_id),
                    "tags": _serialize_value(tx.tags),
                    "splits": _serialize_value(splits),
                }
            )

    return output_path


def export_monthly_table_csv(
    *,
    table: MonthlyTable,
    output_path: Path,
    card_names: Optional[Mapping[str, str]] = None,
    currency: str = "BRL",
) -> Path:
    """Write the monthly card table: one row per visible card, one column per month.

    Cell values are totals; ``(pago)`` marks months flagged as paid. A final
    ``Total`` row carries the per-month totals and the grand total, and the last
    header names the currency of the amounts.
    """

    names = dict(card_names or {})
    names.setdefault(NO_CARD, "Sem cartão")
    headers = ["card", *MONTH_LABELS, f"Total ({currency})"]
    totals = table.card_totals
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL)
        writer.writerow(headers)
        for card_id in table.visible_card_ids():
            row = [names.get(card_id, card_id)]
            for month in range(MONTHS_PER_YEAR):
                cell = table.cell(card_id, month)
                value = _serialize_value(cell.total)
                row.append(f"{value} (pago)" if cell.is_paid else value)
            row.append(_serialize_value(totals[card_id]))
            writer.writerow(row)
        writer.writerow(
            ["Total", *(_serialize_value(t) for t in table.month_totals), _serialize_value(table.grand_total)]
        )

    return output_path


def export_store_transactions_csv(
    store: "EntityStore", *, output_path: Path, group_id: Optional[str] = None
) -> Path:
    """Export every transaction, or one group's, in the store's configured currency."""

    if group_id is None:
        transactions = store.transactions.list_all()
    else:
        transactions = store.transactions.list_by_group(group_id)
    return export_transactions_csv(
        transactions=transactions, output_path=output_path, currency=store.config.CURRENCY
    )

"""Tests for CSV export helpers."""

from __future__ import annotations

import csv
from datetime import datetime
from decimal import Decimal

from sharetab.models import NO_CARD
from sharetab.services import export_csv
from sharetab.services.monthly import load_monthly_table, set_status


def test_export_transactions_csv_creates_file(tmp_path, store, trio, transaction_factory):
    """Exporting ledger data writes a CSV with header and rows."""
    group, ana, bruno, _ = trio
    transaction_factory(
        group.id,
        "100",
        participants=[{"person_id": ana.id}, {"person_id": bruno.id}],
        description="Mercado",
        tags=["casa", "comida"],
    )
    transaction_factory(group.id, "33.333", description="Padaria")

    output_path = tmp_path / "exports" / "ledger.csv"
    export_csv.export_transactions_csv(
        transactions=store.transactions.list_all(), output_path=output_path
    )

    assert output_path.exists(), "ledger export should create a CSV file"
    with output_path.open(newline="", encoding="utf-8") as fh:
        rows = {row["description"]: row for row in csv.DictReader(fh)}

    assert set(rows) == {"Mercado", "Padaria"}
    assert rows["Mercado"]["total_amount"] == "100.00"
    assert rows["Mercado"]["tags"] == "casa;comida"
    assert rows["Mercado"]["splits"] == f"{ana.id}=50.00;{bruno.id}=50.00"
    assert rows["Padaria"]["total_amount"] == "33.33"
    assert rows["Padaria"]["card_id"] == ""


def test_export_monthly_table_csv(tmp_path, store, trio, card_factory, transaction_factory):
    group = trio[0]
    card = card_factory("Nubank")
    transaction_factory(group.id, "120", card_id=card.id, date=datetime(2024, 2, 10))
    transaction_factory(group.id, "30", date=datetime(2024, 5, 10))
    set_status(store, card.id, 2024, 1, True)

    table = load_monthly_table(store, 2024)
    output_path = export_csv.export_monthly_table_csv(
        table=table, output_path=tmp_path / "monthly.csv", card_names={card.id: card.name}
    )

    with output_path.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))

    header, nubank_row, no_card_row, total_row = rows
    assert header[0] == "card" and header[1] == "Jan" and header[-1] == "Total (BRL)"
    assert nubank_row[0] == "Nubank"
    assert nubank_row[2] == "120.00 (pago)"
    assert nubank_row[-1] == "120.00"
    assert no_card_row[0] == "Sem cartão"
    assert no_card_row[5] == "30.00"
    assert total_row[-1] == str(Decimal("150.00"))
    assert NO_CARD not in {row[0] for row in rows}


def test_export_uses_store_currency(tmp_path, store, trio, group_factory, transaction_factory):
    group, ana, _, _ = trio
    other = group_factory("Casa", [ana.id])
    transaction_factory(group.id, "1500", description="Hotel")
    transaction_factory(other.id, "10", description="Aluguel")
    store.config.CURRENCY = "EUR"

    output_path = export_csv.export_store_transactions_csv(
        store, output_path=tmp_path / "viagem.csv", group_id=group.id
    )

    with output_path.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))

    assert [row["description"] for row in rows] == ["Hotel"]
    assert rows[0]["total_amount"] == "1500.00"
    assert rows[0]["total_display"] == "€ 1.500,00"


def test_export_monthly_table_names_currency(tmp_path, store):
    table = load_monthly_table(store, 2024)
    output_path = export_csv.export_monthly_table_csv(
        table=table, output_path=tmp_path / "monthly.csv", currency="USD"
    )

    with output_path.open(newline="", encoding="utf-8") as fh:
        header = next(csv.reader(fh))

    assert header[-1] == "Total (USD)"

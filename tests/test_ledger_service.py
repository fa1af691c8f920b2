"""Transaction and payment workflows through the ledger service."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from sharetab.errors import NotFoundError, ReferentialError, ValidationError
from sharetab.services import ledger_service


@pytest.fixture
def form_data(trio, card_factory):
    group, ana, bruno, carla = trio
    card = card_factory()
    return {
        "group_id": group.id,
        "card_id": card.id,
        "description": "Hotel",
        "total_amount": "100",
        "date": "2024-03-05",
        "paid_by_person_id": ana.id,
        "participants": [
            {"person_id": ana.id, "fixed_amount": "20"},
            {"person_id": bruno.id},
            {"person_id": carla.id, "is_included": False},
        ],
        "tags": "viagem",
    }


def test_create_transaction_computes_splits(store, form_data):
    tx = ledger_service.create_transaction(store, form_data)

    loaded = store.transactions.get_by_id(tx.id)
    assert loaded.total_amount == Decimal("100")
    assert loaded.date == datetime(2024, 3, 5, tzinfo=timezone.utc)
    assert loaded.tags == ["viagem"]
    assert [s.calculated_amount for s in loaded.person_splits()] == [
        Decimal("60"),
        Decimal("40"),
        Decimal("0"),
    ]


def test_create_transaction_rejects_invalid_form(store, form_data):
    form_data["total_amount"] = "0"
    with pytest.raises(ValidationError):
        ledger_service.create_transaction(store, form_data)
    assert store.transactions.list_all() == []


def test_overflowing_fixed_amounts_are_kept_and_logged(store, form_data, caplog):
    form_data["total_amount"] = "50"
    form_data["participants"] = [
        {"person_id": form_data["paid_by_person_id"], "fixed_amount": "30"},
        {"person_id": form_data["participants"][1]["person_id"], "fixed_amount": "30"},
    ]

    with caplog.at_level("WARNING", logger="sharetab"):
        tx = ledger_service.create_transaction(store, form_data)

    assert sum(s.calculated_amount for s in tx.person_splits()) == Decimal("60")
    assert any("exceed" in r.getMessage() for r in caplog.records)


def test_lenient_mode_accepts_outsiders(store, form_data):
    form_data["participants"].append({"person_id": "stranger"})
    tx = ledger_service.create_transaction(store, form_data)
    assert "stranger" in {s.person_id for s in tx.person_splits()}


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("group_id", "missing-group"),
        ("card_id", "missing-card"),
        ("paid_by_person_id", "missing-person"),
    ],
)
def test_strict_mode_checks_references(store, form_data, field, value):
    form_data[field] = value
    with pytest.raises(ReferentialError):
        ledger_service.create_transaction(store, form_data, strict=True)


def test_strict_mode_rejects_non_members(store, form_data, person_factory):
    outsider = person_factory("Zoe")
    form_data["participants"].append({"person_id": outsider.id})
    with pytest.raises(ReferentialError):
        ledger_service.create_transaction(store, form_data, strict=True)


def test_strict_mode_from_config(store, form_data):
    store.config.STRICT_REFERENCES = True
    form_data["group_id"] = "missing-group"
    with pytest.raises(ReferentialError):
        ledger_service.create_transaction(store, form_data)


def test_update_transaction_resplits(store, form_data, trio):
    _, ana, bruno, carla = trio
    tx = ledger_service.create_transaction(store, form_data)
    form_data["total_amount"] = "90"
    form_data["card_id"] = ""
    form_data["participants"] = [{"person_id": p.id} for p in (ana, bruno, carla)]

    updated = ledger_service.update_transaction(store, tx.id, form_data)

    assert updated.card_id is None
    assert [s.calculated_amount for s in updated.person_splits()] == [Decimal("30")] * 3


def test_edit_transaction_rescales_on_total_change(store, form_data):
    tx = ledger_service.create_transaction(store, form_data)

    edited = ledger_service.edit_transaction(
        store, tx.id, {"description": "Hotel + taxas", "total_amount": "50", "tags": "viagem, hotel"}
    )

    splits = edited.person_splits()
    assert edited.description == "Hotel + taxas"
    assert edited.tags == ["viagem", "hotel"]
    assert [s.calculated_amount for s in splits] == [Decimal("30"), Decimal("20"), Decimal("0")]
    assert splits[0].fixed_amount == Decimal("10")


def test_edit_transaction_keeps_splits_when_total_unchanged(store, form_data):
    tx = ledger_service.create_transaction(store, form_data)

    edited = ledger_service.edit_transaction(store, tx.id, {"description": "Pousada", "total_amount": "100.00"})

    assert edited.splits == tx.splits
    assert edited.description == "Pousada"


def test_edit_missing_transaction(store):
    with pytest.raises(NotFoundError):
        ledger_service.edit_transaction(store, "missing", {"description": "x", "total_amount": "1"})


def test_record_and_remove_payment(store, form_data, trio):
    _, _, bruno, _ = trio
    tx = ledger_service.create_transaction(store, form_data)

    payment = ledger_service.record_payment(
        store, {"transaction_id": tx.id, "person_id": bruno.id, "amount": "40"}
    )
    assert store.payments.list_by_transaction(tx.id)[0].amount == Decimal("40")

    ledger_service.remove_payment(store, payment.id)
    ledger_service.remove_payment(store, payment.id)
    assert store.payments.list_by_transaction(tx.id) == []


def test_strict_payment_requires_split(store, form_data):
    tx = ledger_service.create_transaction(store, form_data)

    with pytest.raises(ReferentialError):
        ledger_service.record_payment(
            store, {"transaction_id": tx.id, "person_id": "stranger", "amount": "5"}, strict=True
        )
    with pytest.raises(ReferentialError):
        ledger_service.record_payment(
            store, {"transaction_id": "missing", "person_id": "x", "amount": "5"}, strict=True
        )


def test_payment_amount_must_be_positive(store, form_data, trio):
    tx = ledger_service.create_transaction(store, form_data)
    with pytest.raises(ValidationError):
        ledger_service.record_payment(
            store, {"transaction_id": tx.id, "person_id": trio[1].id, "amount": "-1"}
        )

"""Split calculator and proportional rescaler."""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

import pytest

from sharetab.errors import DegenerateRatioError
from sharetab.models import PersonSplit
from sharetab.services.splits import calculate_splits, rescale_splits, split_overflow, splits_total
from tests.conftest import assert_decimal_equal


def _amounts(splits):
    return [s.calculated_amount for s in splits]


def test_equal_split_among_included():
    splits = calculate_splits(Decimal("90"), [{"person_id": "a"}, {"person_id": "b"}, {"person_id": "c"}])

    assert _amounts(splits) == [Decimal("30"), Decimal("30"), Decimal("30")]
    assert splits_total(splits) == Decimal("90")


def test_fixed_amount_plus_share_of_remainder():
    splits = calculate_splits(
        Decimal("100"),
        [
            {"person_id": "a", "fixed_amount": Decimal("20")},
            {"person_id": "b"},
            {"person_id": "c", "is_included": False},
        ],
    )

    assert _amounts(splits) == [Decimal("60"), Decimal("40"), Decimal("0")]
    assert splits[0].fixed_amount == Decimal("20")
    assert splits[2].is_included is False


def test_output_preserves_input_order():
    people = [{"person_id": pid} for pid in ("z", "m", "a")]
    assert [s.person_id for s in calculate_splits(Decimal("30"), people)] == ["z", "m", "a"]


def test_zero_fixed_amount_counts_as_absent():
    splits = calculate_splits(
        Decimal("50"), [{"person_id": "a", "fixed_amount": 0}, {"person_id": "b", "fixed_amount": ""}]
    )

    assert [s.fixed_amount for s in splits] == [None, None]
    assert _amounts(splits) == [Decimal("25"), Decimal("25")]


def test_accepts_objects_with_attributes():
    participants = [
        SimpleNamespace(person_id="a", is_included=True, fixed_amount=None),
        SimpleNamespace(person_id="b", is_included=True, fixed_amount=Decimal("10")),
    ]
    splits = calculate_splits("40", participants)
    assert _amounts(splits) == [Decimal("15"), Decimal("25")]


def test_excluded_fixed_amount_is_ignored():
    splits = calculate_splits(
        Decimal("40"),
        [{"person_id": "a"}, {"person_id": "b", "is_included": False, "fixed_amount": Decimal("30")}],
    )
    assert _amounts(splits) == [Decimal("40"), Decimal("0")]


def test_nobody_included_yields_zero_splits():
    splits = calculate_splits(Decimal("40"), [{"person_id": "a", "is_included": False}])
    assert _amounts(splits) == [Decimal("0")]


def test_conservation_when_fixed_fits():
    total = Decimal("101")
    splits = calculate_splits(
        total,
        [{"person_id": "a", "fixed_amount": Decimal("10")}, {"person_id": "b"}, {"person_id": "c"}],
    )
    # thirds do not terminate; compare to the cent
    assert_decimal_equal(splits_total(splits), total)
    assert split_overflow(total, splits) == 0


def test_overflow_is_preserved_not_corrected():
    splits = calculate_splits(
        Decimal("50"),
        [{"person_id": "a", "fixed_amount": Decimal("30")}, {"person_id": "b", "fixed_amount": Decimal("30")}],
    )

    assert _amounts(splits) == [Decimal("30"), Decimal("30")]
    assert splits_total(splits) == Decimal("60")
    assert split_overflow(Decimal("50"), splits) == Decimal("10")


def test_rescale_keeps_proportions():
    splits = [
        PersonSplit("a", True, Decimal("30")),
        PersonSplit("b", True, Decimal("70")),
    ]

    rescaled = rescale_splits(splits, Decimal("100"), Decimal("50"))

    assert _amounts(rescaled) == [Decimal("15"), Decimal("35")]
    # input untouched
    assert _amounts(splits) == [Decimal("30"), Decimal("70")]


def test_rescale_scales_fixed_amounts_and_keeps_flags():
    splits = [
        PersonSplit("a", True, Decimal("60"), Decimal("20")),
        PersonSplit("b", False, Decimal("0")),
    ]

    rescaled = rescale_splits(splits, Decimal("100"), Decimal("200"))

    assert rescaled[0].fixed_amount == Decimal("40")
    assert rescaled[0].calculated_amount == Decimal("120")
    assert rescaled[1].is_included is False
    assert rescaled[1].fixed_amount is None


def test_rescale_from_zero_total_is_rejected():
    with pytest.raises(DegenerateRatioError):
        rescale_splits([PersonSplit("a", True, Decimal("0"))], Decimal("0"), Decimal("10"))


def test_single_fixed_amount_over_total_leaves_others_at_zero():
    splits = calculate_splits(
        Decimal("50"), [{"person_id": "a", "fixed_amount": Decimal("60")}, {"person_id": "b"}]
    )

    assert _amounts(splits) == [Decimal("60"), Decimal("0")]
    assert split_overflow(Decimal("50"), splits) == Decimal("10")

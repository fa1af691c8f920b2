"""Split calculation and proportional rescaling.

Both functions are pure: they never touch the store.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Mapping

from ..errors import DegenerateRatioError
from ..models.transaction import PersonSplit
from ..money import ZERO, to_decimal


def _participant_fields(participant: Any) -> tuple[str, bool, Decimal | None]:
    if isinstance(participant, Mapping):
        person_id = participant["person_id"]
        is_included = participant.get("is_included", True)
        fixed = participant.get("fixed_amount")
    else:
        person_id = participant.person_id
        is_included = participant.is_included
        fixed = participant.fixed_amount
    if fixed in (None, ""):
        fixed_amount = None
    else:
        fixed_amount = to_decimal(fixed, field="fixed_amount")
        if fixed_amount == 0:
            fixed_amount = None
    return person_id, bool(is_included), fixed_amount


def calculate_splits(
    total_amount: Decimal | int | float | str, participants: Iterable[Any]
) -> list[PersonSplit]:
    """Split ``total_amount`` across participants.

    Included participants pay their fixed amount (if any) plus an equal share of
    whatever the fixed amounts leave over; excluded participants pay nothing.
    Output order follows input order.

    When the fixed amounts add up to more than the total, the remainder is
    clamped to zero and the splits sum to the fixed total instead of the
    transaction total. That overflow is accepted, see ``split_overflow``.
    """

    total = to_decimal(total_amount, field="total_amount")
    rows = [_participant_fields(p) for p in participants]

    fixed_total = sum(
        (fixed for _, included, fixed in rows if included and fixed is not None), ZERO
    )
    remaining = max(ZERO, total - fixed_total)
    included_count = sum(1 for _, included, _ in rows if included)
    equal_share = remaining / included_count if included_count > 0 else ZERO

    splits: list[PersonSplit] = []
    for person_id, included, fixed in rows:
        calculated = ((fixed or ZERO) + equal_share) if included else ZERO
        splits.append(
            PersonSplit(
                person_id=person_id,
                is_included=included,
                calculated_amount=calculated,
                fixed_amount=fixed,
            )
        )
    return splits


def splits_total(splits: Iterable[PersonSplit]) -> Decimal:
    """Sum of calculated amounts over included splits."""
    return sum((s.calculated_amount for s in splits if s.is_included), ZERO)


def split_overflow(total_amount: Decimal | int | float | str, splits: Iterable[PersonSplit]) -> Decimal:
    """How far the splits exceed the transaction total (zero when they don't)."""
    return max(ZERO, splits_total(splits) - to_decimal(total_amount, field="total_amount"))


def rescale_splits(
    splits: Iterable[PersonSplit],
    old_total: Decimal | int | float | str,
    new_total: Decimal | int | float | str,
) -> list[PersonSplit]:
    """Scale every split by ``new_total / old_total``.

    Keeps each person's proportion of the old split instead of re-running
    ``calculate_splits``, so fixed amounts scale along with everything else.
    """

    old = to_decimal(old_total, field="old_total")
    new = to_decimal(new_total, field="new_total")
    if old == 0:
        raise DegenerateRatioError("Cannot rescale splits of a transaction whose total is zero")

    ratio = new / old
    return [
        PersonSplit(
            person_id=split.person_id,
            is_included=split.is_included,
            calculated_amount=split.calculated_amount * ratio,
            fixed_amount=None if split.fixed_amount is None else split.fixed_amount * ratio,
        )
        for split in splits
    ]

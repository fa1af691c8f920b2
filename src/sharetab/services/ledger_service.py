"""Transaction and payment workflows: validate, split, persist."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from ..domain.updates import TransactionUpdate
from ..errors import NotFoundError, ReferentialError
from ..forms import PaymentForm, TransactionEditForm, TransactionForm, validate_form
from ..logging_config import get_logger
from ..models.payment import Payment
from ..models.transaction import PersonSplit, Transaction, dump_splits
from .splits import calculate_splits, rescale_splits, split_overflow

if TYPE_CHECKING:  # pragma: no cover
    from ..infra.repositories.cascade import CascadePlan
    from ..infra.store import EntityStore

logger = get_logger(__name__)


def _strict(store: "EntityStore", strict: Optional[bool]) -> bool:
    return store.config.STRICT_REFERENCES if strict is None else strict


def _check_transaction_references(store: "EntityStore", form: TransactionForm) -> None:
    group = store.groups.get_by_id(form.group_id)
    if group is None:
        raise ReferentialError(f"Group {form.group_id!r} does not exist")
    outsiders = [p.person_id for p in form.participants if not group.has_member(p.person_id)]
    if outsiders:
        raise ReferentialError(f"Split references people outside the group: {outsiders}")
    if store.persons.get_by_id(form.paid_by_person_id) is None:
        raise ReferentialError(f"Payer {form.paid_by_person_id!r} does not exist")
    if form.card_id is not None and store.cards.get_by_id(form.card_id) is None:
        raise ReferentialError(f"Card {form.card_id!r} does not exist")


def build_splits(form: TransactionForm) -> list[PersonSplit]:
    """Run the split calculator over a validated form and warn on overflow."""

    splits = calculate_splits(form.total_amount, form.participants)
    overflow = split_overflow(form.total_amount, splits)
    if overflow > 0:
        logger.warning(
            "Fixed amounts exceed transaction total",
            extra={"total_amount": form.total_amount, "overflow": overflow},
        )
    return splits


def create_transaction(
    store: "EntityStore", data: TransactionForm | dict[str, Any], *, strict: Optional[bool] = None
) -> Transaction:
    """Validate the form, compute splits and persist a new transaction."""

    form = validate_form(TransactionForm, data)
    if _strict(store, strict):
        _check_transaction_references(store, form)

    transaction = Transaction(
        group_id=form.group_id,
        card_id=form.card_id,
        description=form.description,
        total_amount=form.total_amount,
        date=form.date,
        paid_by_person_id=form.paid_by_person_id,
        splits=dump_splits(build_splits(form)),
        tags=form.tags,
    )
    created = store.transactions.create(transaction)
    logger.info(
        "Transaction created",
        extra={"transaction_id": created.id, "group_id": created.group_id},
    )
    return created


def update_transaction(
    store: "EntityStore",
    transaction_id: str,
    data: TransactionForm | dict[str, Any],
    *,
    strict: Optional[bool] = None,
) -> Transaction:
    """Full edit: every field is replaced and splits are recomputed from the form."""

    form = validate_form(TransactionForm, data)
    if _strict(store, strict):
        _check_transaction_references(store, form)

    return store.transactions.update(
        transaction_id,
        TransactionUpdate(
            description=form.description,
            card_id=form.card_id,
            total_amount=form.total_amount,
            date=form.date,
            paid_by_person_id=form.paid_by_person_id,
            splits=build_splits(form),
            tags=form.tags,
        ),
    )


def edit_transaction(
    store: "EntityStore", transaction_id: str, data: TransactionEditForm | dict[str, Any]
) -> Transaction:
    """Quick edit of description, amount and tags.

    A changed total rescales the existing splits proportionally rather than
    re-running the calculator.
    """

    form = validate_form(TransactionEditForm, data)
    existing = store.transactions.get_by_id(transaction_id)
    if existing is None:
        raise NotFoundError("Transaction", transaction_id)

    changes = TransactionUpdate(description=form.description, tags=form.tags)
    if form.total_amount != existing.total_amount:
        changes.total_amount = form.total_amount
        changes.splits = rescale_splits(
            existing.person_splits(), existing.total_amount, form.total_amount
        )
        logger.info(
            "Transaction total rescaled",
            extra={
                "transaction_id": transaction_id,
                "old_total": existing.total_amount,
                "new_total": form.total_amount,
            },
        )
    return store.transactions.update(transaction_id, changes)


def delete_transaction(store: "EntityStore", transaction_id: str) -> "CascadePlan":
    """Delete a transaction and its payments; returns what was removed."""

    plan = store.transactions.plan_delete(transaction_id)
    store.transactions.delete(transaction_id)
    logger.info("Transaction deleted", extra={"transaction_id": transaction_id, **plan.counts()})
    return plan


def delete_group(store: "EntityStore", group_id: str) -> "CascadePlan":
    """Delete a group with its transactions and their payments."""

    plan = store.groups.plan_delete(group_id)
    store.groups.delete(group_id)
    logger.info("Group deleted", extra={"group_id": group_id, **plan.counts()})
    return plan


def record_payment(
    store: "EntityStore", data: PaymentForm | dict[str, Any], *, strict: Optional[bool] = None
) -> Payment:
    """Record a (possibly partial, possibly excess) payment against a transaction."""

    form = validate_form(PaymentForm, data)
    if _strict(store, strict):
        transaction = store.transactions.get_by_id(form.transaction_id)
        if transaction is None:
            raise ReferentialError(f"Transaction {form.transaction_id!r} does not exist")
        if all(s.person_id != form.person_id for s in transaction.person_splits()):
            raise ReferentialError(
                f"Person {form.person_id!r} has no split on transaction {transaction.id!r}"
            )

    payment = store.payments.create(
        Payment(
            transaction_id=form.transaction_id,
            person_id=form.person_id,
            amount=form.amount,
            paid_at=form.paid_at,
        )
    )
    logger.info(
        "Payment recorded",
        extra={"payment_id": payment.id, "transaction_id": payment.transaction_id},
    )
    return payment


def remove_payment(store: "EntityStore", payment_id: str) -> None:
    store.payments.delete(payment_id)
    logger.info("Payment removed", extra={"payment_id": payment_id})

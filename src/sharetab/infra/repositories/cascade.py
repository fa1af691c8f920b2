"""Two-phase cascading deletes: collect descendant ids, then delete leaf-to-root."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.group import Group
from ...models.payment import Payment
from ...models.transaction import Transaction

logger = get_logger(__name__)


@dataclass
class CascadePlan:
    """Every record a delete will remove, grouped by tier."""

    group_ids: list[str] = field(default_factory=list)
    transaction_ids: list[str] = field(default_factory=list)
    payment_ids: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.group_ids or self.transaction_ids or self.payment_ids)

    def counts(self) -> dict[str, int]:
        return {
            "groups": len(self.group_ids),
            "transactions": len(self.transaction_ids),
            "payments": len(self.payment_ids),
        }


def _payment_ids_for(session: Session, transaction_ids: list[str]) -> list[str]:
    if not transaction_ids:
        return []
    statement = select(Payment.id).where(Payment.transaction_id.in_(transaction_ids))  # type: ignore[attr-defined]
    return list(session.exec(statement).all())


def plan_transaction_delete(session: Session, transaction_id: str) -> CascadePlan:
    """Collect a transaction and its payments.

    Payments are collected even when the transaction row is already gone so a
    retried delete can clean up orphans left by an interrupted run.
    """

    plan = CascadePlan()
    if session.get(Transaction, transaction_id) is not None:
        plan.transaction_ids.append(transaction_id)
    plan.payment_ids = _payment_ids_for(session, [transaction_id])
    return plan


def plan_group_delete(session: Session, group_id: str) -> CascadePlan:
    """Collect a group, all of its transactions and all of their payments."""

    plan = CascadePlan()
    if session.get(Group, group_id) is not None:
        plan.group_ids.append(group_id)
    statement = select(Transaction.id).where(Transaction.group_id == group_id)
    plan.transaction_ids = list(session.exec(statement).all())
    plan.payment_ids = _payment_ids_for(session, plan.transaction_ids)
    return plan


def execute_plan(session: Session, plan: CascadePlan) -> None:
    """Delete payments, then transactions, then groups, committing once."""

    if plan.is_empty():
        return
    for model, ids in (
        (Payment, plan.payment_ids),
        (Transaction, plan.transaction_ids),
        (Group, plan.group_ids),
    ):
        for record_id in ids:
            obj = session.get(model, record_id)
            if obj is not None:
                session.delete(obj)
        session.flush()
    session.commit()
    logger.info("Cascade delete applied", extra=plan.counts())

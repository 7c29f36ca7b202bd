"""Hold and recall of parked carts and pending orders."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

from sqlalchemy import delete
from sqlalchemy.orm import Session, selectinload

from scoop_pos.models.held_order import HeldOrder
from scoop_pos.models.order import Order
from scoop_pos.services.app_state import AppState
from scoop_pos.services.cart import CheckoutSession, EmptyCartError
from scoop_pos.services.order_status import set_status
from scoop_pos.utils.time import utcnow

logger = logging.getLogger(__name__)


class HeldOrderNotFoundError(Exception):
    """Raised when a held record does not exist, is not owned, or was recalled already."""


class ActiveCartNotEmptyError(Exception):
    """Raised when recalling a cart snapshot over a cart that still has lines."""


@dataclass(frozen=True)
class RecallResult:
    held_id: str
    session: CheckoutSession | None = None
    order: Order | None = None


def generate_held_id() -> str:
    return f"HLD-{uuid4().hex[:10].upper()}"


def list_held_orders(db: Session, owner_id: int) -> list[HeldOrder]:
    return (
        db.query(HeldOrder)
        .options(selectinload(HeldOrder.original_order).selectinload(Order.items))
        .filter(HeldOrder.held_by == owner_id)
        .order_by(HeldOrder.held_at.desc())
        .all()
    )


def get_held_order(db: Session, held_id: str, owner_id: int) -> HeldOrder | None:
    return db.query(HeldOrder).filter(HeldOrder.id == held_id, HeldOrder.held_by == owner_id).first()


def hold_active_cart(
    db: Session,
    state: AppState,
    *,
    owner_id: int,
    reason: str | None = None,
    now: datetime | None = None,
) -> HeldOrder:
    """Park the active cart as a snapshot and clear it."""
    with state.lock:
        session = state.load_session(owner_id)
        if session.cart.is_empty():
            raise EmptyCartError("Add items to hold an order")
        totals = session.totals(state.tax_rate)
        snapshot = session.to_snapshot()
        snapshot["subtotal"] = str(totals.subtotal)
        snapshot["total"] = str(totals.total)

        held = HeldOrder(
            id=generate_held_id(),
            held_by=owner_id,
            held_at=now or utcnow(),
            reason=reason or None,
            snapshot=snapshot,
        )
        db.add(held)
        db.commit()
        db.refresh(held)
        state.clear_session(owner_id)
    logger.info("[HOLD] Held cart %s for user_id=%s", held.id, owner_id)
    return held


def hold_order(
    db: Session,
    order: Order,
    *,
    owner_id: int,
    reason: str | None = None,
    now: datetime | None = None,
) -> HeldOrder:
    """Park an existing pending order; the order moves to ``held``."""
    now = now or utcnow()
    set_status(order, "held", now)
    held = HeldOrder(
        id=generate_held_id(),
        held_by=owner_id,
        held_at=now,
        reason=reason or None,
        original_order_id=order.id,
    )
    db.add(held)
    db.add(order)
    db.commit()
    db.refresh(held)
    logger.info("[HOLD] Held order %s as %s", order.order_number, held.id)
    return held


def _delete_held_row(db: Session, held_id: str, owner_id: int) -> None:
    result = db.execute(
        delete(HeldOrder)
        .where(HeldOrder.id == held_id, HeldOrder.held_by == owner_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        raise HeldOrderNotFoundError(f"Held order {held_id} not found")


def recall_held_order(
    db: Session,
    state: AppState,
    *,
    held_id: str,
    owner_id: int,
    now: datetime | None = None,
) -> RecallResult:
    """Remove a held record and restore what it parked.

    Removal and restore run under the state lock inside one transaction, so a
    held record can be recalled at most once.
    """
    now = now or utcnow()
    with state.lock:
        held = get_held_order(db, held_id, owner_id)
        if held is None:
            raise HeldOrderNotFoundError(f"Held order {held_id} not found")

        snapshot = dict(held.snapshot) if held.snapshot else None
        order = held.original_order
        if snapshot is not None and not state.load_session(owner_id).cart.is_empty():
            raise ActiveCartNotEmptyError("Finish or hold the current order before recalling")

        _delete_held_row(db, held_id, owner_id)
        if order is not None:
            set_status(order, "pending", now)
            db.add(order)
        db.commit()

        restored: CheckoutSession | None = None
        if snapshot is not None:
            restored = CheckoutSession.from_snapshot(snapshot)
            state.save_session(owner_id, restored)

    if order is not None:
        db.refresh(order)
    logger.info("[HOLD] Recalled %s for user_id=%s", held_id, owner_id)
    return RecallResult(held_id=held_id, session=restored, order=order)


def delete_held_order(db: Session, *, held_id: str, owner_id: int, now: datetime | None = None) -> None:
    """Discard a held record; a parked order is cancelled with it."""
    held = get_held_order(db, held_id, owner_id)
    if held is None:
        raise HeldOrderNotFoundError(f"Held order {held_id} not found")
    order = held.original_order
    _delete_held_row(db, held_id, owner_id)
    if order is not None and order.status == "held":
        set_status(order, "cancelled", now or utcnow())
        db.add(order)
    db.commit()

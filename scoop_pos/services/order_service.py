"""Order domain logic: checkout, placement, settlement and listing."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from scoop_pos.models.order import ORDER_TYPES, PAYMENT_METHODS, Order, OrderItem
from scoop_pos.services.cart import ZERO, CheckoutSession, EmptyCartError, to_money
from scoop_pos.services.order_status import InvalidStatusTransitionError, set_status
from scoop_pos.utils.time import utcnow


class CheckoutValidationError(Exception):
    """Raised when payment method or order type is missing or unknown."""


class OrderAlreadyPaidError(Exception):
    """Raised when settling an order that is already paid."""


class SplitAmountError(Exception):
    """Raised when a split amount is outside 0..total."""


def _normalize_payment_method(payment_method: str | None) -> str:
    normalized = str(payment_method or "").strip().lower()
    if normalized not in PAYMENT_METHODS:
        raise CheckoutValidationError("Please select a valid payment method")
    return normalized


def _normalize_order_type(order_type: str | None) -> str:
    normalized = str(order_type or "").strip().lower()
    if normalized not in ORDER_TYPES:
        raise CheckoutValidationError("Please select a valid order type")
    return normalized


def generate_order_number(db: Session, order_date: date) -> tuple[int, str]:
    """Return next per-day sequence and its display number, e.g. ORD-20260101-0001."""
    current_max: int | None = db.query(func.max(Order.order_seq)).filter(Order.order_date == order_date).scalar()
    next_seq = (current_max or 0) + 1
    return next_seq, f"ORD-{order_date.strftime('%Y%m%d')}-{next_seq:04d}"


def _build_order(
    db: Session,
    session: CheckoutSession,
    *,
    owner_id: int,
    order_type: str,
    tax_rate: Decimal,
    now: datetime,
) -> Order:
    if session.cart.is_empty():
        raise EmptyCartError("Add items to the order first")
    totals = session.totals(tax_rate)
    order_seq, order_number = generate_order_number(db, now.date())
    order = Order(
        order_number=order_number,
        order_date=now.date(),
        order_seq=order_seq,
        customer_name=session.customer_name or None,
        customer_phone=session.customer_phone or None,
        table_number=session.table_number or None,
        order_type=order_type,
        subtotal_amount=totals.subtotal,
        discount_amount=totals.discount,
        tax_amount=totals.tax,
        total_amount=totals.total,
        created_by=owner_id,
        created_at=now,
    )
    for line in session.cart.lines:
        order.items.append(
            OrderItem(
                menu_item_id=line.menu_item_id,
                name=line.name,
                category=line.category,
                unit_price=line.unit_price,
                quantity=line.quantity,
                total_price=line.total_price,
            )
        )
    return order


def checkout(
    db: Session,
    session: CheckoutSession,
    *,
    owner_id: int,
    payment_method: str | None,
    order_type: str | None,
    tax_rate: Decimal = ZERO,
    now: datetime | None = None,
) -> Order:
    """Persist a completed, paid order from the active session.

    Header and lines are written in one transaction. The caller clears the
    session once this returns.
    """
    method = _normalize_payment_method(payment_method)
    kind = _normalize_order_type(order_type)
    now = now or utcnow()
    order = _build_order(db, session, owner_id=owner_id, order_type=kind, tax_rate=tax_rate, now=now)
    order.status = "completed"
    order.status_updated_at = now
    order.payment_method = method
    order.payment_status = "paid"
    order.paid_at = now
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


def place_order(
    db: Session,
    session: CheckoutSession,
    *,
    owner_id: int,
    order_type: str | None,
    tax_rate: Decimal = ZERO,
    now: datetime | None = None,
) -> Order:
    """Persist an unpaid pending order from the active session."""
    kind = _normalize_order_type(order_type)
    now = now or utcnow()
    order = _build_order(db, session, owner_id=owner_id, order_type=kind, tax_rate=tax_rate, now=now)
    order.status = "pending"
    order.payment_status = "pending"
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


def pay_order(db: Session, order: Order, *, payment_method: str | None, now: datetime | None = None) -> Order:
    """Settle a placed order: mark it paid and completed unless the kitchen already did."""
    if order.payment_status == "paid":
        raise OrderAlreadyPaidError(f"Order {order.order_number} is already paid")
    method = _normalize_payment_method(payment_method)
    now = now or utcnow()
    if order.status != "completed":
        set_status(order, "completed", now)
    order.payment_method = method
    order.payment_status = "paid"
    order.paid_at = now
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


def change_order_status(db: Session, order: Order, new_status: str, now: datetime | None = None) -> Order:
    """Move an order through the status table; holding has its own flow."""
    if new_status == "held" or order.status == "held":
        raise InvalidStatusTransitionError(order.status, new_status)
    set_status(order, new_status, now or utcnow())
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


def get_order(db: Session, order_id: int, owner_id: int) -> Order | None:
    return (
        db.query(Order)
        .options(selectinload(Order.items))
        .filter(Order.id == order_id, Order.created_by == owner_id)
        .first()
    )


def list_orders(
    db: Session,
    owner_id: int,
    *,
    search: str | None = None,
    order_type: str | None = None,
) -> list[Order]:
    """Return owner's orders newest first, filtered by search text and type."""
    query = db.query(Order).options(selectinload(Order.items)).filter(Order.created_by == owner_id)
    if order_type and order_type != "All":
        query = query.filter(Order.order_type == order_type)
    if search:
        needle = search.strip().lower()
        query = query.filter(
            or_(
                func.lower(Order.customer_name).contains(needle),
                func.lower(Order.order_number).contains(needle),
            )
        )
    return query.order_by(Order.created_at.desc(), Order.id.desc()).all()


def recent_orders(db: Session, owner_id: int, limit: int = 10) -> list[Order]:
    """Return latest completed or paid orders."""
    return (
        db.query(Order)
        .options(selectinload(Order.items))
        .filter(
            Order.created_by == owner_id,
            or_(Order.status == "completed", Order.payment_status == "paid"),
        )
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(limit)
        .all()
    )


def split_remaining(total: Decimal, split_amount: Decimal) -> Decimal:
    """Return balance left after a partial payment; nothing is persisted."""
    total = to_money(total)
    split_amount = to_money(split_amount)
    if split_amount < ZERO or split_amount > total:
        raise SplitAmountError(f"Split amount must be between 0 and {total}")
    return total - split_amount

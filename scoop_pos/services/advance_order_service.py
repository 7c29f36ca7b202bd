"""Advance order booking and delivery lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy.orm import Session, selectinload

from scoop_pos.models.advance_order import AdvanceOrder, AdvanceOrderItem
from scoop_pos.services.cart import ZERO, Cart, EmptyCartError, to_money
from scoop_pos.services.menu_service import get_orderable_item
from scoop_pos.services.order_status import set_advance_status
from scoop_pos.utils.time import utcnow


class AdvanceOrderValidationError(Exception):
    """Raised when required booking fields are missing or amounts are inconsistent."""


class MenuItemNotFoundError(Exception):
    """Raised when a booked menu item does not exist."""


@dataclass(frozen=True)
class BookingLine:
    menu_item_id: int
    quantity: int = 1


def create_advance_order(
    db: Session,
    *,
    owner_id: int,
    customer_name: str,
    customer_phone: str,
    delivery_date: date | None,
    lines: list[BookingLine],
    advance_amount: Decimal = ZERO,
    customer_email: str | None = None,
    delivery_time: time | None = None,
    special_instructions: str | None = None,
    now: datetime | None = None,
) -> AdvanceOrder:
    """Book an advance order priced from the current catalog."""
    if not customer_name or not customer_name.strip() or not customer_phone or not customer_phone.strip():
        raise AdvanceOrderValidationError("Customer name and phone are required")
    if delivery_date is None:
        raise AdvanceOrderValidationError("Delivery date is required")

    cart = Cart()
    for line in lines:
        item = get_orderable_item(db, line.menu_item_id)
        if item is None:
            raise MenuItemNotFoundError(f"Menu item {line.menu_item_id} not found")
        cart.add_item(
            menu_item_id=item.id,
            name=item.name,
            category=item.category,
            unit_price=item.price,
            quantity=line.quantity,
        )
    if cart.is_empty():
        raise EmptyCartError("Please add items to the advance order")

    total = cart.subtotal()
    advance = to_money(advance_amount)
    if advance < ZERO or advance > total:
        raise AdvanceOrderValidationError(f"Advance amount must be between 0 and {total}")

    order = AdvanceOrder(
        customer_name=customer_name.strip(),
        customer_phone=customer_phone.strip(),
        customer_email=customer_email or None,
        delivery_date=delivery_date,
        delivery_time=delivery_time,
        total_amount=total,
        advance_amount=advance,
        remaining_amount=total - advance,
        status="pending",
        special_instructions=special_instructions or None,
        created_by=owner_id,
        created_at=now or utcnow(),
    )
    for cart_line in cart.lines:
        order.items.append(
            AdvanceOrderItem(
                menu_item_id=cart_line.menu_item_id,
                name=cart_line.name,
                category=cart_line.category,
                unit_price=cart_line.unit_price,
                quantity=cart_line.quantity,
                total_price=cart_line.total_price,
            )
        )
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


def list_advance_orders(db: Session, owner_id: int, status: str | None = None) -> list[AdvanceOrder]:
    """Return owner's advance orders ordered by delivery date."""
    query = (
        db.query(AdvanceOrder)
        .options(selectinload(AdvanceOrder.items))
        .filter(AdvanceOrder.created_by == owner_id)
    )
    if status and status != "all":
        query = query.filter(AdvanceOrder.status == status)
    return query.order_by(AdvanceOrder.delivery_date.asc(), AdvanceOrder.id.asc()).all()


def get_advance_order(db: Session, order_id: int, owner_id: int) -> AdvanceOrder | None:
    return (
        db.query(AdvanceOrder)
        .options(selectinload(AdvanceOrder.items))
        .filter(AdvanceOrder.id == order_id, AdvanceOrder.created_by == owner_id)
        .first()
    )


def change_advance_status(db: Session, order: AdvanceOrder, new_status: str, now: datetime | None = None) -> AdvanceOrder:
    """Advance the delivery lifecycle; revenue picks the new status up on next read."""
    set_advance_status(order, new_status, now or utcnow())
    db.add(order)
    db.commit()
    db.refresh(order)
    return order

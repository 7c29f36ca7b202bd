"""Notification feed derived from advance orders and held orders."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from scoop_pos.services.cart import ZERO, to_money
from scoop_pos.utils.time import ensure_utc

ADVANCE_ORDER_TYPE: str = "advance-order"
HELD_ORDER_TYPE: str = "held-order"
NOTIFICATION_TYPES: tuple[str, ...] = (ADVANCE_ORDER_TYPE, HELD_ORDER_TYPE)
WALK_IN_CUSTOMER: str = "Walk-in Customer"


@dataclass(frozen=True)
class Notification:
    key: str
    id: str
    type: str
    title: str
    customer_name: str
    customer_phone: str | None
    total: Decimal
    status: str
    time_label: str
    is_read: bool
    order_number: str | None = None
    reason: str | None = None
    delivery_date: date | None = None
    delivery_time: time | None = None
    special_instructions: str | None = None


def notification_key(notification_type: str, notification_id: Any) -> str:
    return f"{notification_type}-{notification_id}"


def _plural_days(days: int) -> str:
    return f"{days} day" if days == 1 else f"{days} days"


def delivery_time_label(delivery_date: date, now: datetime) -> str:
    """Describe a delivery date relative to today."""
    days = (delivery_date - ensure_utc(now).date()).days
    if days == 0:
        return "Today"
    if days > 0:
        return f"{_plural_days(days)} ahead"
    return f"{_plural_days(-days)} ago"


def held_time_label(held_at: datetime, now: datetime) -> str:
    minutes = max(int((ensure_utc(now) - ensure_utc(held_at)).total_seconds() // 60), 0)
    if minutes < 60:
        return f"Held {minutes} min ago"
    return f"Held {minutes // 60}h {minutes % 60}m ago"


def _advance_notification(order: Any, read_keys: set[str], now: datetime) -> Notification:
    key = notification_key(ADVANCE_ORDER_TYPE, order.id)
    return Notification(
        key=key,
        id=str(order.id),
        type=ADVANCE_ORDER_TYPE,
        title="Advance Order Booking",
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        total=to_money(order.total_amount),
        status=order.status,
        time_label=delivery_time_label(order.delivery_date, now),
        is_read=key in read_keys,
        delivery_date=order.delivery_date,
        delivery_time=order.delivery_time,
        special_instructions=order.special_instructions,
    )


def _held_notification(held: Any, read_keys: set[str], now: datetime) -> Notification:
    key = notification_key(HELD_ORDER_TYPE, held.id)
    original = held.original_order
    snapshot = held.snapshot or {}
    if original is not None:
        customer_name = original.customer_name or WALK_IN_CUSTOMER
        customer_phone = original.customer_phone
        total = to_money(original.total_amount)
        order_number = original.order_number
    else:
        customer_name = snapshot.get("customer_name") or WALK_IN_CUSTOMER
        customer_phone = snapshot.get("customer_phone")
        total = to_money(snapshot.get("total") or ZERO)
        order_number = None
    return Notification(
        key=key,
        id=str(held.id),
        type=HELD_ORDER_TYPE,
        title="Order On Hold",
        customer_name=customer_name,
        customer_phone=customer_phone,
        total=total,
        status="held",
        time_label=held_time_label(held.held_at, now),
        is_read=key in read_keys,
        order_number=order_number,
        reason=held.reason,
    )


def build_notifications(
    advance_orders: Iterable[Any],
    held_orders: Iterable[Any],
    read_keys: set[str],
    now: datetime,
) -> list[Notification]:
    """Map advance orders then held orders into one feed."""
    notifications = [_advance_notification(order, read_keys, now) for order in advance_orders]
    notifications.extend(_held_notification(held, read_keys, now) for held in held_orders)
    return notifications


def unread_count(notifications: Sequence[Notification], read_keys: set[str]) -> int:
    return len(notifications) - sum(1 for notification in notifications if notification.key in read_keys)

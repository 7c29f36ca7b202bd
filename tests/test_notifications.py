"""Notification feed derivation tests."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

from scoop_pos.services.notification_service import (
    build_notifications,
    delivery_time_label,
    held_time_label,
    unread_count,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def _booking(order_id: int, delivery_date: date) -> SimpleNamespace:
    return SimpleNamespace(
        id=order_id,
        customer_name="Ravi",
        customer_phone="9876543210",
        total_amount=Decimal("500.00"),
        status="pending",
        delivery_date=delivery_date,
        delivery_time=None,
        special_instructions="Less sugar",
    )


def _held_snapshot(held_id: str, minutes_ago: int) -> SimpleNamespace:
    return SimpleNamespace(
        id=held_id,
        held_at=NOW - timedelta(minutes=minutes_ago),
        reason="Customer stepped out",
        original_order=None,
        snapshot={"customer_name": None, "customer_phone": None, "total": "12.25", "items": []},
    )


def test_delivery_labels_relative_to_today() -> None:
    today = NOW.date()

    assert delivery_time_label(today, NOW) == "Today"
    assert delivery_time_label(today + timedelta(days=1), NOW) == "1 day ahead"
    assert delivery_time_label(today + timedelta(days=3), NOW) == "3 days ahead"
    assert delivery_time_label(today - timedelta(days=2), NOW) == "2 days ago"


def test_held_labels_switch_to_hours_after_sixty_minutes() -> None:
    assert held_time_label(NOW - timedelta(minutes=5), NOW) == "Held 5 min ago"
    assert held_time_label(NOW - timedelta(minutes=135), NOW) == "Held 2h 15m ago"


def test_feed_maps_bookings_then_held_orders_with_read_flags() -> None:
    read_keys = {"advance-order-1"}

    notifications = build_notifications(
        [_booking(1, NOW.date()), _booking(2, NOW.date() + timedelta(days=2))],
        [_held_snapshot("HLD-ABC", 5)],
        read_keys,
        NOW,
    )

    assert [item.key for item in notifications] == ["advance-order-1", "advance-order-2", "held-order-HLD-ABC"]
    assert [item.is_read for item in notifications] == [True, False, False]
    assert notifications[1].time_label == "2 days ahead"
    held = notifications[2]
    assert held.customer_name == "Walk-in Customer"
    assert held.total == Decimal("12.25")
    assert held.reason == "Customer stepped out"
    assert unread_count(notifications, read_keys) == 2


def test_held_order_reference_uses_order_fields() -> None:
    order = SimpleNamespace(
        customer_name="Meera",
        customer_phone="12345",
        total_amount=Decimal("20.00"),
        order_number="ORD-20260310-0003",
    )
    held = SimpleNamespace(id="HLD-XYZ", held_at=NOW, reason=None, original_order=order, snapshot=None)

    [notification] = build_notifications([], [held], set(), NOW)

    assert notification.customer_name == "Meera"
    assert notification.order_number == "ORD-20260310-0003"
    assert notification.total == Decimal("20.00")
    assert notification.time_label == "Held 0 min ago"

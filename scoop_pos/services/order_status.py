"""Order and advance order status transition helpers."""

from __future__ import annotations

from datetime import datetime

from scoop_pos.models.advance_order import AdvanceOrder
from scoop_pos.models.order import Order

ORDER_STATUSES: list[str] = ["pending", "preparing", "ready", "completed", "cancelled", "held"]

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"preparing", "ready", "completed", "cancelled", "held"},
    "preparing": {"ready", "completed", "cancelled"},
    "ready": {"completed", "cancelled"},
    "held": {"pending", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}

ADVANCE_ORDER_STATUSES: list[str] = ["pending", "confirmed", "ready", "delivered"]

# Forward-only; later states may be set directly.
ADVANCE_ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"confirmed", "ready", "delivered"},
    "confirmed": {"ready", "delivered"},
    "ready": {"delivered"},
    "delivered": set(),
}


class InvalidStatusTransitionError(Exception):
    """Raised when a status change is not in the allowed-transition table."""

    def __init__(self, current: str, new: str) -> None:
        super().__init__(f"Cannot change status from {current} to {new}")
        self.current = current
        self.new = new


def can_transition(current: str, new: str) -> bool:
    """Return whether order can move from current to new status."""
    return new in ALLOWED_TRANSITIONS.get(current, set())


def can_transition_advance(current: str, new: str) -> bool:
    """Return whether advance order can move from current to new status."""
    return new in ADVANCE_ALLOWED_TRANSITIONS.get(current, set())


def set_status(order: Order, new_status: str, now: datetime) -> None:
    """Validate and set order status, updating corresponding timestamps."""
    if not can_transition(order.status, new_status):
        raise InvalidStatusTransitionError(order.status, new_status)
    order.status = new_status
    order.status_updated_at = now


def set_advance_status(order: AdvanceOrder, new_status: str, now: datetime) -> None:
    """Validate and set advance order status, updating corresponding timestamps."""
    if not can_transition_advance(order.status, new_status):
        raise InvalidStatusTransitionError(order.status, new_status)
    order.status = new_status
    order.status_updated_at = now

    if new_status == "confirmed":
        order.confirmed_at = now
    elif new_status == "ready":
        order.ready_at = now
    elif new_status == "delivered":
        order.delivered_at = now

"""Held order API schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from scoop_pos.models.held_order import HeldOrder
from scoop_pos.schemas.cart import CartResponse
from scoop_pos.schemas.order import OrderResponse
from scoop_pos.services.cart import ZERO, to_money


class HeldOrderResponse(BaseModel):
    """A parked cart snapshot or a reference to a parked order."""

    id: str
    held_at: datetime
    reason: str | None
    customer_name: str | None
    total: Decimal
    original_order_id: int | None
    order_number: str | None = None
    snapshot: dict[str, Any] | None

    @classmethod
    def from_held(cls, held: HeldOrder) -> "HeldOrderResponse":
        order = held.original_order
        if order is not None:
            customer_name = order.customer_name
            total = to_money(order.total_amount)
            order_number = order.order_number
        else:
            snapshot = held.snapshot or {}
            customer_name = snapshot.get("customer_name")
            total = to_money(snapshot.get("total") or ZERO)
            order_number = None
        return cls(
            id=held.id,
            held_at=held.held_at,
            reason=held.reason,
            customer_name=customer_name,
            total=total,
            original_order_id=held.original_order_id,
            order_number=order_number,
            snapshot=held.snapshot,
        )


class RecallResponse(BaseModel):
    held_id: str
    cart: CartResponse | None = None
    order: OrderResponse | None = None

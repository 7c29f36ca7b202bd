"""Order API schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class OrderItemResponse(BaseModel):
    """Serialized order line snapshot."""

    id: int
    menu_item_id: int | None
    name: str
    category: str | None
    unit_price: Decimal
    quantity: int
    total_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Serialized order with lines."""

    id: int
    order_number: str
    order_date: date
    customer_name: str | None
    customer_phone: str | None
    table_number: str | None
    order_type: str
    status: str
    payment_method: str | None
    payment_status: str
    subtotal_amount: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    created_at: datetime
    status_updated_at: datetime | None
    paid_at: datetime | None
    items: list[OrderItemResponse]

    model_config = ConfigDict(from_attributes=True)


class OrderListResponse(BaseModel):
    """Filtered orders plus the revenue of the filtered rows."""

    orders: list[OrderResponse]
    total_revenue: Decimal


class OrderStatusUpdate(BaseModel):
    status: str


class OrderPaymentRequest(BaseModel):
    payment_method: str

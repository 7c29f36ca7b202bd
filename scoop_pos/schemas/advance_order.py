"""Advance order API schemas."""

from datetime import date, datetime, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class AdvanceOrderItemPayload(BaseModel):
    menu_item_id: int
    quantity: int = Field(default=1, ge=1)


class AdvanceOrderCreate(BaseModel):
    """Booking payload; lines are priced from the catalog."""

    customer_name: str = Field(min_length=1)
    customer_phone: str = Field(min_length=1)
    customer_email: str | None = None
    delivery_date: date
    delivery_time: time | None = None
    special_instructions: str | None = None
    advance_amount: Decimal = Field(default=Decimal("0"), ge=0)
    items: list[AdvanceOrderItemPayload] = Field(min_length=1)


class AdvanceOrderStatusUpdate(BaseModel):
    status: str


class AdvanceOrderItemResponse(BaseModel):
    id: int
    menu_item_id: int | None
    name: str
    category: str | None
    unit_price: Decimal
    quantity: int
    total_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class AdvanceOrderResponse(BaseModel):
    """Serialized advance order with lines."""

    id: int
    customer_name: str
    customer_phone: str
    customer_email: str | None
    delivery_date: date
    delivery_time: time | None
    total_amount: Decimal
    advance_amount: Decimal
    remaining_amount: Decimal
    status: str
    special_instructions: str | None
    created_at: datetime
    confirmed_at: datetime | None
    ready_at: datetime | None
    delivered_at: datetime | None
    items: list[AdvanceOrderItemResponse]

    model_config = ConfigDict(from_attributes=True)

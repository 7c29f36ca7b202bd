"""Notification feed schemas."""

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
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

    model_config = ConfigDict(from_attributes=True)


class NotificationFeedResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int


class MarkReadResponse(BaseModel):
    key: str
    newly_read: bool
    unread_count: int

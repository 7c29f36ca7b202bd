"""Menu catalog API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class MenuItemCreate(BaseModel):
    """Payload for creating a menu item."""

    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    price: Decimal = Field(gt=0, decimal_places=2)
    description: str | None = None
    in_stock: bool = True
    stock_quantity: int = Field(default=0, ge=0)


class MenuItemUpdate(BaseModel):
    """Partial update; omitted fields keep their value."""

    name: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    price: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    description: str | None = None
    in_stock: bool | None = None
    stock_quantity: int | None = Field(default=None, ge=0)


class MenuItemResponse(BaseModel):
    """Serialized menu item."""

    id: int
    name: str
    category: str
    description: str | None
    price: Decimal
    in_stock: bool
    stock_quantity: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

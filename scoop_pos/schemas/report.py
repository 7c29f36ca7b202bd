"""Dashboard and report schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from scoop_pos.schemas.advance_order import AdvanceOrderResponse
from scoop_pos.schemas.order import OrderResponse


class PeriodStatsResponse(BaseModel):
    period: str
    revenue: Decimal
    orders: int
    customers: int

    model_config = ConfigDict(from_attributes=True)


class DashboardResponse(BaseModel):
    """Headline figures for today, week and month."""

    generated_at: datetime
    stats: list[PeriodStatsResponse]
    recent_orders: list[OrderResponse]
    upcoming_advance_orders: list[AdvanceOrderResponse]


class DailySalesResponse(BaseModel):
    day: date
    sales: Decimal
    orders: int

    model_config = ConfigDict(from_attributes=True)


class ProductSalesResponse(BaseModel):
    name: str
    sales: Decimal
    quantity: int
    avg_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class TypeCountResponse(BaseModel):
    order_type: str
    label: str
    count: int

    model_config = ConfigDict(from_attributes=True)


class ReportResponse(BaseModel):
    """Sales report for one period."""

    period_label: str
    start: datetime
    end: datetime
    total_revenue: Decimal
    total_orders: int
    total_customers: int
    avg_order_value: Decimal
    revenue_growth: Decimal
    daily_sales: list[DailySalesResponse]
    top_products: list[ProductSalesResponse]
    orders_by_type: list[TypeCountResponse]

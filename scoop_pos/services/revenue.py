"""Revenue aggregation over orders and advance orders.

All functions are pure and accept any objects exposing the ORM attribute
names (``status``, ``payment_status``, ``total_amount``, ``advance_amount``,
``created_at``, ``order_type``, ``items``).

Advance order recognition:

* ``confirmed`` counts the advance amount only;
* ``delivered`` counts the full total, so the remainder is added exactly once;
* any other status counts nothing.

Both orders and advance orders are attributed to the window containing their
``created_at``; the delivery date plays no part.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any

from scoop_pos.services.cart import ZERO, to_money
from scoop_pos.utils.time import ensure_utc, today_window_utc

COUNTED_ADVANCE_STATUSES: frozenset[str] = frozenset({"confirmed", "delivered"})
UNKNOWN_PRODUCT: str = "Unknown Product"


@dataclass(frozen=True)
class Window:
    """Half-open time range ``[start, end)`` in UTC."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= ensure_utc(moment) < self.end

    @property
    def length(self) -> timedelta:
        return self.end - self.start

    def previous(self) -> Window:
        """Immediately preceding window of equal length."""
        return Window(start=self.start - self.length, end=self.start)


def today_window(now: datetime) -> Window:
    start, end = today_window_utc(now)
    return Window(start=start, end=end)


def trailing_window(now: datetime, days: int) -> Window:
    """The last ``days`` days up to ``now``."""
    now = ensure_utc(now)
    return Window(start=now - timedelta(days=days), end=now)


def date_range_window(from_date: date, to_date: date) -> Window:
    """Whole days from ``from_date`` through ``to_date`` inclusive."""
    if to_date < from_date:
        raise ValueError("End date must not be before start date")
    start = datetime.combine(from_date, time.min, tzinfo=timezone.utc)
    end = datetime.combine(to_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return Window(start=start, end=end)


def is_completed_sale(order: Any) -> bool:
    return order.status == "completed" or order.payment_status == "paid"


def is_counted_advance(advance_order: Any) -> bool:
    return advance_order.status in COUNTED_ADVANCE_STATUSES


def advance_recognized_amount(advance_order: Any) -> Decimal:
    """Portion of an advance order recognized as revenue at its current status."""
    if advance_order.status == "delivered":
        return to_money(advance_order.total_amount)
    if advance_order.status == "confirmed":
        return to_money(advance_order.advance_amount)
    return ZERO


def _in_window(record: Any, start: datetime, end: datetime) -> bool:
    return start <= ensure_utc(record.created_at) < end


def revenue(orders: Iterable[Any], advance_orders: Iterable[Any], start: datetime, end: datetime) -> Decimal:
    """Sum completed/paid order totals plus recognized advance amounts created in window."""
    start, end = ensure_utc(start), ensure_utc(end)
    orders_revenue = sum(
        (to_money(order.total_amount) for order in orders if is_completed_sale(order) and _in_window(order, start, end)),
        ZERO,
    )
    advance_revenue = sum(
        (advance_recognized_amount(order) for order in advance_orders if _in_window(order, start, end)),
        ZERO,
    )
    return to_money(orders_revenue + advance_revenue)


def order_count(orders: Iterable[Any], advance_orders: Iterable[Any], start: datetime, end: datetime) -> int:
    """Count completed/paid orders plus confirmed/delivered advance orders created in window."""
    start, end = ensure_utc(start), ensure_utc(end)
    completed = sum(1 for order in orders if is_completed_sale(order) and _in_window(order, start, end))
    advances = sum(1 for order in advance_orders if is_counted_advance(order) and _in_window(order, start, end))
    return completed + advances


def customer_count(orders: Iterable[Any], advance_orders: Iterable[Any], start: datetime, end: datetime) -> int:
    """One customer per counted order; not a distinct-customer count."""
    return order_count(orders, advance_orders, start, end)


def growth_rate(current: Decimal, previous: Decimal) -> Decimal:
    """Percent change against the previous window, 0 when there is nothing to compare."""
    if previous <= 0:
        return Decimal("0")
    return (Decimal(current) - Decimal(previous)) / Decimal(previous) * Decimal(100)


def order_type_label(order_type: str) -> str:
    return order_type[:1].upper() + order_type[1:].replace("-", " ", 1)


@dataclass
class DailySales:
    day: date
    sales: Decimal = ZERO
    orders: int = 0


@dataclass
class ProductSales:
    name: str
    sales: Decimal = ZERO
    quantity: int = 0

    @property
    def avg_price(self) -> Decimal:
        if self.quantity <= 0:
            return ZERO
        return to_money(self.sales / self.quantity)


@dataclass(frozen=True)
class TypeCount:
    order_type: str
    label: str
    count: int


@dataclass
class ReportSummary:
    window: Window
    total_revenue: Decimal
    total_orders: int
    total_customers: int
    avg_order_value: Decimal
    revenue_growth: Decimal
    daily_sales: list[DailySales] = field(default_factory=list)
    top_products: list[ProductSales] = field(default_factory=list)
    orders_by_type: list[TypeCount] = field(default_factory=list)


def _daily_buckets(window: Window) -> dict[date, DailySales]:
    buckets: dict[date, DailySales] = {}
    day = window.start.date()
    last_day = (window.end - timedelta(microseconds=1)).date()
    while day <= last_day:
        buckets[day] = DailySales(day=day)
        day += timedelta(days=1)
    return buckets


def _add_items(products: dict[str, ProductSales], items: Iterable[Any] | None) -> None:
    for item in items or []:
        name = getattr(item, "name", None) or UNKNOWN_PRODUCT
        product = products.setdefault(name, ProductSales(name=name))
        product.sales = to_money(product.sales + item.total_price)
        product.quantity += int(item.quantity)


def build_report(
    orders: Iterable[Any],
    advance_orders: Iterable[Any],
    window: Window,
    *,
    top_n: int = 5,
) -> ReportSummary:
    """Compute every report metric for ``window`` with the shared inclusion rules."""
    orders = list(orders)
    advance_orders = list(advance_orders)

    sales = [order for order in orders if is_completed_sale(order) and window.contains(order.created_at)]
    period_advances = [order for order in advance_orders if window.contains(order.created_at)]
    counted_advances = [order for order in period_advances if is_counted_advance(order)]

    total_revenue = revenue(sales, period_advances, window.start, window.end)
    total_orders = len(sales) + len(counted_advances)
    avg_order_value = to_money(total_revenue / total_orders) if total_orders else ZERO

    buckets = _daily_buckets(window)
    for order in sales:
        bucket = buckets.get(ensure_utc(order.created_at).date())
        if bucket is not None:
            bucket.sales = to_money(bucket.sales + order.total_amount)
            bucket.orders += 1
    for order in counted_advances:
        bucket = buckets.get(ensure_utc(order.created_at).date())
        if bucket is not None:
            bucket.sales = to_money(bucket.sales + advance_recognized_amount(order))
            bucket.orders += 1

    products: dict[str, ProductSales] = {}
    for order in sales:
        _add_items(products, order.items)
    for order in counted_advances:
        _add_items(products, order.items)
    top_products = sorted(products.values(), key=lambda product: product.sales, reverse=True)[:top_n]

    type_counts: dict[str, int] = defaultdict(int)
    for order in sales:
        type_counts[order.order_type or "dine-in"] += 1
    if counted_advances:
        type_counts["advance-order"] += len(counted_advances)
    orders_by_type = [
        TypeCount(order_type=kind, label=order_type_label(kind), count=count) for kind, count in type_counts.items()
    ]

    previous = window.previous()
    previous_revenue = revenue(orders, advance_orders, previous.start, previous.end)

    return ReportSummary(
        window=window,
        total_revenue=total_revenue,
        total_orders=total_orders,
        total_customers=total_orders,
        avg_order_value=avg_order_value,
        revenue_growth=growth_rate(total_revenue, previous_revenue),
        daily_sales=list(buckets.values()),
        top_products=top_products,
        orders_by_type=orders_by_type,
    )

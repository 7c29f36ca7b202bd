"""Dashboard aggregates for today, the last week and the last month."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from scoop_pos.services.revenue import (
    Window,
    customer_count,
    is_completed_sale,
    order_count,
    revenue,
    today_window,
    trailing_window,
)
from scoop_pos.utils.time import ensure_utc

WEEK_DAYS: int = 7
MONTH_DAYS: int = 30


@dataclass(frozen=True)
class PeriodStats:
    period: str
    revenue: Decimal
    orders: int
    customers: int


def period_windows(now: datetime) -> dict[str, Window]:
    return {
        "today": today_window(now),
        "week": trailing_window(now, WEEK_DAYS),
        "month": trailing_window(now, MONTH_DAYS),
    }


def period_stats(orders: Sequence[Any], advance_orders: Sequence[Any], now: datetime) -> list[PeriodStats]:
    stats: list[PeriodStats] = []
    for period, window in period_windows(now).items():
        stats.append(
            PeriodStats(
                period=period,
                revenue=revenue(orders, advance_orders, window.start, window.end),
                orders=order_count(orders, advance_orders, window.start, window.end),
                customers=customer_count(orders, advance_orders, window.start, window.end),
            )
        )
    return stats


def latest_sales(orders: Sequence[Any], limit: int = 10) -> list[Any]:
    completed = [order for order in orders if is_completed_sale(order)]
    return sorted(completed, key=lambda order: ensure_utc(order.created_at), reverse=True)[:limit]


def upcoming_advance_orders(advance_orders: Sequence[Any], limit: int = 3) -> list[Any]:
    """Undelivered bookings, soonest delivery first."""
    pending = [order for order in advance_orders if order.status != "delivered"]
    return sorted(pending, key=lambda order: (order.delivery_date, order.id))[:limit]

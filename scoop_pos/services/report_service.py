"""Sales report assembly for a selected period."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy.orm import Session, selectinload

from scoop_pos.models.advance_order import AdvanceOrder
from scoop_pos.models.order import Order
from scoop_pos.services.revenue import ReportSummary, Window, build_report, date_range_window, trailing_window
from scoop_pos.utils.time import utcnow

REPORT_PERIOD_DAYS: tuple[int, ...] = (7, 30, 90, 365)


class ReportPeriodError(Exception):
    """Raised for unsupported period lengths or incomplete date ranges."""


@dataclass(frozen=True)
class ReportPeriod:
    window: Window
    label: str
    slug: str


def resolve_period(
    *,
    days: int | None = None,
    from_date: date | None = None,
    to_date: date | None = None,
    now: datetime | None = None,
) -> ReportPeriod:
    """Resolve a trailing period or an inclusive custom date range."""
    if from_date is not None or to_date is not None:
        if from_date is None or to_date is None:
            raise ReportPeriodError("Both from and to dates are required for a date range")
        try:
            window = date_range_window(from_date, to_date)
        except ValueError as exc:
            raise ReportPeriodError(str(exc)) from exc
        return ReportPeriod(
            window=window,
            label=f"{from_date.strftime('%d %b %Y')} to {to_date.strftime('%d %b %Y')}",
            slug=f"{from_date.strftime('%d-%b-%Y')}-to-{to_date.strftime('%d-%b-%Y')}",
        )

    period_days = days or REPORT_PERIOD_DAYS[0]
    if period_days not in REPORT_PERIOD_DAYS:
        raise ReportPeriodError(f"Period must be one of {', '.join(str(value) for value in REPORT_PERIOD_DAYS)} days")
    return ReportPeriod(
        window=trailing_window(now or utcnow(), period_days),
        label=f"Last {period_days} days",
        slug=f"{period_days}-days",
    )


def load_sales_records(db: Session, owner_id: int) -> tuple[list[Order], list[AdvanceOrder]]:
    """Load owner's orders and advance orders with their lines."""
    orders = (
        db.query(Order)
        .options(selectinload(Order.items))
        .filter(Order.created_by == owner_id)
        .all()
    )
    advance_orders = (
        db.query(AdvanceOrder)
        .options(selectinload(AdvanceOrder.items))
        .filter(AdvanceOrder.created_by == owner_id)
        .all()
    )
    return orders, advance_orders


def build_sales_report(db: Session, owner_id: int, period: ReportPeriod) -> ReportSummary:
    orders, advance_orders = load_sales_records(db, owner_id)
    return build_report(orders, advance_orders, period.window)

"""Sales report and export endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from scoop_pos.core.config import settings
from scoop_pos.core.security import get_current_user
from scoop_pos.db.session import get_db
from scoop_pos.models.user import User
from scoop_pos.schemas.report import (
    DailySalesResponse,
    ProductSalesResponse,
    ReportResponse,
    TypeCountResponse,
)
from scoop_pos.services.report_exports import render_csv, render_html, render_pdf, report_filename
from scoop_pos.services.report_service import ReportPeriod, ReportPeriodError, build_sales_report, resolve_period
from scoop_pos.utils.time import utcnow

router: APIRouter = APIRouter()

EXPORT_MEDIA_TYPES: dict[str, str] = {
    "csv": "text/csv; charset=utf-8",
    "html": "text/html; charset=utf-8",
    "pdf": "application/pdf",
}


def _resolve(days: int | None, from_date: date | None, to_date: date | None) -> ReportPeriod:
    try:
        return resolve_period(days=days, from_date=from_date, to_date=to_date)
    except ReportPeriodError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("", response_model=ReportResponse)
def get_report(
    days: int | None = Query(default=None),
    from_date: date | None = Query(default=None, alias="from"),
    to_date: date | None = Query(default=None, alias="to"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ReportResponse:
    """Report for the last 7/30/90/365 days or an inclusive date range."""
    period = _resolve(days, from_date, to_date)
    report = build_sales_report(db, current_user.id, period)
    return ReportResponse(
        period_label=period.label,
        start=report.window.start,
        end=report.window.end,
        total_revenue=report.total_revenue,
        total_orders=report.total_orders,
        total_customers=report.total_customers,
        avg_order_value=report.avg_order_value,
        revenue_growth=report.revenue_growth,
        daily_sales=[DailySalesResponse.model_validate(day) for day in report.daily_sales],
        top_products=[
            ProductSalesResponse(
                name=product.name,
                sales=product.sales,
                quantity=product.quantity,
                avg_price=product.avg_price,
            )
            for product in report.top_products
        ],
        orders_by_type=[TypeCountResponse.model_validate(entry) for entry in report.orders_by_type],
    )


@router.get("/export/{export_format}")
def export_report(
    export_format: str,
    days: int | None = Query(default=None),
    from_date: date | None = Query(default=None, alias="from"),
    to_date: date | None = Query(default=None, alias="to"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    """Download the report as CSV, printable HTML or PDF."""
    if export_format not in EXPORT_MEDIA_TYPES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown export format")
    period = _resolve(days, from_date, to_date)
    report = build_sales_report(db, current_user.id, period)

    if export_format == "csv":
        content: str | bytes = render_csv(report, currency_symbol=settings.currency_symbol)
    elif export_format == "html":
        content = render_html(
            report,
            period_label=period.label,
            generated_at=utcnow(),
            currency_symbol=settings.currency_symbol,
        )
    else:
        content = render_pdf(
            report,
            period_label=period.label,
            generated_at=utcnow(),
            currency_symbol=settings.currency_symbol,
        )

    filename = report_filename(period.slug, export_format)
    disposition = "inline" if export_format == "html" else "attachment"
    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[export_format],
        headers={"Content-Disposition": f'{disposition}; filename="{filename}"'},
    )

"""CSV, printable HTML and PDF exports of a sales report."""

from __future__ import annotations

import csv
import re
from datetime import datetime
from decimal import Decimal
from io import BytesIO, StringIO
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from scoop_pos.services.revenue import ReportSummary
from scoop_pos.utils.pdf_fonts import register_pdf_font

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def _reportlab():
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

    return {
        "colors": colors,
        "A4": A4,
        "ParagraphStyle": ParagraphStyle,
        "getSampleStyleSheet": getSampleStyleSheet,
        "Paragraph": Paragraph,
        "SimpleDocTemplate": SimpleDocTemplate,
        "Spacer": Spacer,
        "Table": Table,
        "TableStyle": TableStyle,
    }


def sanitize_filename(value: str, max_length: int = 80) -> str:
    """Return a filesystem-friendly filename fragment."""
    normalized = re.sub(r"[\\/:*?\"<>|]+", "_", (value or "").strip())
    normalized = re.sub(r"\s+", "_", normalized)
    normalized = re.sub(r"_+", "_", normalized).strip("._")
    return (normalized or "report")[:max_length]


def report_filename(slug: str, extension: str) -> str:
    return f"reports-{sanitize_filename(slug)}.{extension}"


def format_money(value: Decimal | int | float, symbol: str) -> str:
    return f"{symbol}{Decimal(value):,.2f}"


def format_percent(value: Decimal | int | float) -> str:
    return f"{Decimal(value):.1f}%"


def render_csv(report: ReportSummary, *, currency_symbol: str) -> str:
    """Flat metric/value rows followed by top products and orders by type."""
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Metric", "Value"])
    writer.writerow(["Total Revenue", format_money(report.total_revenue, currency_symbol)])
    writer.writerow(["Total Orders", report.total_orders])
    writer.writerow(["Total Customers", report.total_customers])
    writer.writerow(["Average Order Value", format_money(report.avg_order_value, currency_symbol)])
    writer.writerow(["Revenue Growth", format_percent(report.revenue_growth)])
    writer.writerow([])
    writer.writerow(["Top Products", ""])
    writer.writerow(["Product Name", "Sales", "Quantity"])
    for product in report.top_products:
        writer.writerow([product.name, format_money(product.sales, currency_symbol), product.quantity])
    writer.writerow([])
    writer.writerow(["Orders by Type", ""])
    writer.writerow(["Type", "Count"])
    for entry in report.orders_by_type:
        writer.writerow([entry.label, entry.count])
    return buffer.getvalue()


def render_html(report: ReportSummary, *, period_label: str, generated_at: datetime, currency_symbol: str) -> str:
    """Print-formatted HTML report."""
    template = _environment.get_template("report.html")
    return template.render(
        report=report,
        period_label=period_label,
        generated_on=generated_at.strftime("%d %b %Y %H:%M"),
        money=lambda value: format_money(value, currency_symbol),
        percent=format_percent,
    )


def _table(rows: list[list[Any]], col_widths: list[int], font_name: str) -> Any:
    rl = _reportlab()
    table = rl["Table"](rows, colWidths=col_widths)
    table.setStyle(
        rl["TableStyle"](
            [
                ("BACKGROUND", (0, 0), (-1, 0), rl["colors"].lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.5, rl["colors"].black),
                ("FONTNAME", (0, 0), (-1, -1), font_name),
            ]
        )
    )
    return table


def render_pdf(report: ReportSummary, *, period_label: str, generated_at: datetime, currency_symbol: str) -> bytes:
    """Generate the report as a single A4 PDF and return bytes."""
    font_name = register_pdf_font()
    rl = _reportlab()
    styles = rl["getSampleStyleSheet"]()
    title = rl["ParagraphStyle"]("PosTitle", parent=styles["Title"], fontName=font_name)
    heading = rl["ParagraphStyle"]("PosHeading2", parent=styles["Heading2"], fontName=font_name)
    normal = rl["ParagraphStyle"]("PosNormal", parent=styles["Normal"], fontName=font_name)

    def money(value: Decimal) -> str:
        return format_money(value, currency_symbol)

    story: list[Any] = [
        rl["Paragraph"]("Business Report", title),
        rl["Paragraph"](f"Period: {period_label}", normal),
        rl["Paragraph"](f"Generated on: {generated_at.strftime('%d %b %Y %H:%M')}", normal),
        rl["Spacer"](1, 12),
        _table(
            [
                ["Metric", "Value"],
                ["Total Revenue", money(report.total_revenue)],
                ["Total Orders", str(report.total_orders)],
                ["Total Customers", str(report.total_customers)],
                ["Average Order Value", money(report.avg_order_value)],
                ["Revenue Growth", format_percent(report.revenue_growth)],
            ],
            [300, 160],
            font_name,
        ),
        rl["Spacer"](1, 12),
        rl["Paragraph"]("Top Products", heading),
    ]
    if report.top_products:
        story.append(
            _table(
                [
                    ["Product Name", "Sales", "Quantity", "Avg Price"],
                    *[
                        [product.name, money(product.sales), str(product.quantity), money(product.avg_price)]
                        for product in report.top_products
                    ],
                ],
                [200, 100, 70, 90],
                font_name,
            )
        )
    else:
        story.append(rl["Paragraph"]("No sales in this period.", normal))

    story.append(rl["Spacer"](1, 12))
    story.append(rl["Paragraph"]("Orders by Type", heading))
    if report.orders_by_type:
        story.append(
            _table(
                [["Type", "Count"], *[[entry.label, str(entry.count)] for entry in report.orders_by_type]],
                [300, 160],
                font_name,
            )
        )
    else:
        story.append(rl["Paragraph"]("No orders in this period.", normal))

    buffer = BytesIO()
    rl["SimpleDocTemplate"](buffer, pagesize=rl["A4"]).build(story)
    return buffer.getvalue()

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from scoop_pos.services.report_exports import render_csv, render_html, render_pdf, report_filename, sanitize_filename
from scoop_pos.services.revenue import build_report, trailing_window

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def _report():
    item = SimpleNamespace(name="Hot Fudge Sundae", quantity=2, total_price=Decimal("16.50"))
    order = SimpleNamespace(
        status="completed",
        payment_status="paid",
        total_amount=Decimal("16.50"),
        created_at=NOW - timedelta(days=1),
        order_type="takeaway",
        items=[item],
    )
    return build_report([order], [], trailing_window(NOW, 7))


def test_csv_has_metrics_then_sections() -> None:
    rows = render_csv(_report(), currency_symbol="₹").splitlines()

    assert rows[0] == "Metric,Value"
    assert rows[1] == "Total Revenue,₹16.50"
    assert rows[2] == "Total Orders,1"
    assert rows[4] == "Average Order Value,₹16.50"
    assert rows[5] == "Revenue Growth,0.0%"
    assert rows[7] == "Top Products,"
    assert rows[8] == "Product Name,Sales,Quantity"
    assert rows[9] == "Hot Fudge Sundae,₹16.50,2"
    assert rows[11] == "Orders by Type,"
    assert rows[13] == "Takeaway,1"


def test_html_report_is_printable_and_escaped() -> None:
    report = _report()
    report.top_products[0].name = "<b>Fudge</b>"

    html = render_html(report, period_label="Last 7 days", generated_at=NOW, currency_symbol="$")

    assert "window.print()" in html
    assert "Period: Last 7 days" in html
    assert "$16.50" in html
    assert "&lt;b&gt;Fudge&lt;/b&gt;" in html


def test_pdf_report_renders_bytes() -> None:
    pytest.importorskip("reportlab")

    pdf_bytes = render_pdf(_report(), period_label="Last 7 days", generated_at=NOW, currency_symbol="₹")

    assert pdf_bytes.startswith(b"%PDF")


def test_filenames_are_sanitized() -> None:
    assert sanitize_filename("01 Mar/2026") == "01_Mar_2026"
    assert sanitize_filename("  ") == "report"
    assert report_filename("7-days", "csv") == "reports-7-days.csv"

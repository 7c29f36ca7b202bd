"""Report endpoint and download tests."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from scoop_pos.core.config import settings
from scoop_pos.db import session as db_session
from scoop_pos.db.base import Base
from scoop_pos.main import app


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup(tmp_path: Path, monkeypatch) -> None:
    engine = _build_test_engine(tmp_path / "test_reports.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "local_state_path", str(tmp_path / "state.json"))
    monkeypatch.setattr(settings, "tax_rate", Decimal("0"))
    monkeypatch.setattr(settings, "currency_symbol", "₹")


def _record_sale(client: TestClient) -> dict[str, str]:
    client.post("/api/v1/auth/register", json={"username": "reports", "password": "secret123"})
    token = client.post("/api/v1/auth/login", json={"username": "reports", "password": "secret123"}).json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    menu = {item["name"]: item["id"] for item in client.get("/api/v1/menu", headers=headers).json()}
    client.post("/api/v1/cart/items", json={"menu_item_id": menu["Chocolate Fudge Blast"], "quantity": 2}, headers=headers)
    response = client.post(
        "/api/v1/cart/checkout",
        json={"payment_method": "card", "order_type": "takeaway"},
        headers=headers,
    )
    assert response.status_code == 201
    return headers


@pytest.fixture
def sale_client(tmp_path: Path, monkeypatch):
    _setup(tmp_path, monkeypatch)
    with TestClient(app) as client:
        yield client, _record_sale(client)


def test_report_summary_for_trailing_period(sale_client) -> None:
    client, headers = sale_client

    report = client.get("/api/v1/reports", params={"days": 30}, headers=headers).json()

    assert report["period_label"] == "Last 30 days"
    assert Decimal(report["total_revenue"]) == Decimal("12.50")
    assert report["total_orders"] == 1
    assert report["total_customers"] == 1
    assert Decimal(report["avg_order_value"]) == Decimal("12.50")
    assert Decimal(report["revenue_growth"]) == Decimal("0")
    assert report["top_products"][0]["name"] == "Chocolate Fudge Blast"
    assert Decimal(report["top_products"][0]["avg_price"]) == Decimal("6.25")
    assert len(report["daily_sales"]) == 31


def test_custom_range_and_invalid_periods(sale_client) -> None:
    client, headers = sale_client
    today = datetime.now(timezone.utc).date()

    in_range = client.get(
        "/api/v1/reports",
        params={"from": (today - timedelta(days=1)).isoformat(), "to": today.isoformat()},
        headers=headers,
    ).json()
    assert Decimal(in_range["total_revenue"]) == Decimal("12.50")
    assert len(in_range["daily_sales"]) == 2

    before = client.get(
        "/api/v1/reports",
        params={"from": (today - timedelta(days=10)).isoformat(), "to": (today - timedelta(days=5)).isoformat()},
        headers=headers,
    ).json()
    assert Decimal(before["total_revenue"]) == Decimal("0")

    assert client.get("/api/v1/reports", params={"days": 8}, headers=headers).status_code == 400
    assert client.get("/api/v1/reports", params={"from": today.isoformat()}, headers=headers).status_code == 400
    reversed_range = {"from": today.isoformat(), "to": (today - timedelta(days=1)).isoformat()}
    assert client.get("/api/v1/reports", params=reversed_range, headers=headers).status_code == 400


def test_csv_and_html_downloads(sale_client) -> None:
    client, headers = sale_client

    csv_response = client.get("/api/v1/reports/export/csv", params={"days": 7}, headers=headers)
    assert csv_response.status_code == 200
    assert csv_response.headers["content-type"].startswith("text/csv")
    assert 'filename="reports-7-days.csv"' in csv_response.headers["content-disposition"]
    lines = csv_response.text.splitlines()
    assert lines[0] == "Metric,Value"
    assert lines[1] == "Total Revenue,₹12.50"
    assert "Takeaway,1" in lines

    html_response = client.get("/api/v1/reports/export/html", params={"days": 7}, headers=headers)
    assert html_response.status_code == 200
    assert "Business Report" in html_response.text
    assert "Chocolate Fudge Blast" in html_response.text

    assert client.get("/api/v1/reports/export/xlsx", headers=headers).status_code == 404


def test_pdf_download(sale_client) -> None:
    pytest.importorskip("reportlab")
    client, headers = sale_client

    response = client.get("/api/v1/reports/export/pdf", params={"days": 90}, headers=headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="reports-90-days.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")

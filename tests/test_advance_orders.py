"""Advance order lifecycle, notification and revenue recognition tests."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

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
    engine = _build_test_engine(tmp_path / "test_advance.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "local_state_path", str(tmp_path / "state.json"))


def _auth_headers(client: TestClient) -> dict[str, str]:
    client.post("/api/v1/auth/register", json={"username": "bookings", "password": "secret123"})
    token = client.post("/api/v1/auth/login", json={"username": "bookings", "password": "secret123"}).json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def _booking_payload(menu: dict[str, int], **overrides) -> dict:
    payload = {
        "customer_name": "Ravi",
        "customer_phone": "9876543210",
        "delivery_date": (datetime.now(timezone.utc).date() + timedelta(days=2)).isoformat(),
        "delivery_time": "16:30",
        "special_instructions": "Birthday candles",
        "advance_amount": "5.00",
        "items": [{"menu_item_id": menu["Classic Vanilla Bean"], "quantity": 2}],
    }
    payload.update(overrides)
    return payload


def _menu_ids(client: TestClient, headers: dict[str, str]) -> dict[str, int]:
    return {item["name"]: item["id"] for item in client.get("/api/v1/menu", headers=headers).json()}


def test_booking_is_priced_from_catalog(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _auth_headers(client)
        menu = _menu_ids(client, headers)

        response = client.post("/api/v1/advance-orders", json=_booking_payload(menu), headers=headers)
        assert response.status_code == 201
        booking = response.json()
        assert booking["status"] == "pending"
        assert Decimal(booking["total_amount"]) == Decimal("7.00")
        assert Decimal(booking["advance_amount"]) == Decimal("5.00")
        assert Decimal(booking["remaining_amount"]) == Decimal("2.00")
        assert booking["items"][0]["name"] == "Classic Vanilla Bean"

        over = client.post("/api/v1/advance-orders", json=_booking_payload(menu, advance_amount="7.01"), headers=headers)
        assert over.status_code == 400
        assert client.post("/api/v1/advance-orders", json=_booking_payload(menu, items=[]), headers=headers).status_code == 422
        assert client.post("/api/v1/advance-orders", json=_booking_payload(menu, customer_phone=""), headers=headers).status_code == 422
        missing_item = _booking_payload(menu, items=[{"menu_item_id": 9999, "quantity": 1}])
        assert client.post("/api/v1/advance-orders", json=missing_item, headers=headers).status_code == 404


def test_lifecycle_drives_revenue_recognition(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _auth_headers(client)
        menu = _menu_ids(client, headers)
        booking = client.post("/api/v1/advance-orders", json=_booking_payload(menu), headers=headers).json()
        url = f"/api/v1/advance-orders/{booking['id']}/status"

        def today_revenue() -> Decimal:
            stats = client.get("/api/v1/dashboard", headers=headers).json()["stats"]
            return Decimal(next(row["revenue"] for row in stats if row["period"] == "today"))

        assert today_revenue() == Decimal("0")

        confirmed = client.patch(url, json={"status": "confirmed"}, headers=headers)
        assert confirmed.status_code == 200
        assert confirmed.json()["confirmed_at"] is not None
        assert today_revenue() == Decimal("5.00")

        assert client.patch(url, json={"status": "pending"}, headers=headers).status_code == 409

        assert client.patch(url, json={"status": "ready"}, headers=headers).status_code == 200
        assert today_revenue() == Decimal("0")

        delivered = client.patch(url, json={"status": "delivered"}, headers=headers)
        assert delivered.json()["delivered_at"] is not None
        assert today_revenue() == Decimal("7.00")

        report = client.get("/api/v1/reports", params={"days": 7}, headers=headers).json()
        assert Decimal(report["total_revenue"]) == Decimal("7.00")
        assert report["orders_by_type"] == [{"order_type": "advance-order", "label": "Advance order", "count": 1}]

        assert client.patch(url, json={"status": "shipped"}, headers=headers).status_code == 400

        dashboard = client.get("/api/v1/dashboard", headers=headers).json()
        assert dashboard["upcoming_advance_orders"] == []


def test_bookings_appear_in_notifications_until_read(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _auth_headers(client)
        menu = _menu_ids(client, headers)
        booking = client.post("/api/v1/advance-orders", json=_booking_payload(menu), headers=headers).json()
        key = f"advance-order-{booking['id']}"

        feed = client.get("/api/v1/notifications", headers=headers).json()
        assert feed["unread_count"] == 1
        assert feed["notifications"][0]["key"] == key
        assert feed["notifications"][0]["time_label"] == "2 days ahead"
        assert feed["notifications"][0]["special_instructions"] == "Birthday candles"

        first = client.post(f"/api/v1/notifications/{key}/read", headers=headers).json()
        assert first == {"key": key, "newly_read": True, "unread_count": 0}
        again = client.post(f"/api/v1/notifications/{key}/read", headers=headers).json()
        assert again["newly_read"] is False
        assert client.get("/api/v1/notifications", headers=headers).json()["notifications"][0]["is_read"] is True

        listing = client.get("/api/v1/advance-orders", params={"status": "pending"}, headers=headers).json()
        assert [row["id"] for row in listing] == [booking["id"]]
        assert client.get("/api/v1/advance-orders", params={"status": "delivered"}, headers=headers).json() == []

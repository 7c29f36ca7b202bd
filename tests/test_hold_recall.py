"""Hold and recall flow tests."""

from decimal import Decimal
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from scoop_pos.core.config import settings
from scoop_pos.db import session as db_session
from scoop_pos.db.base import Base
from scoop_pos.main import app
from scoop_pos.models.held_order import HeldOrder
from scoop_pos.models.order import Order


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup(tmp_path: Path, monkeypatch) -> sessionmaker:
    engine = _build_test_engine(tmp_path / "test_hold.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "local_state_path", str(tmp_path / "state.json"))
    monkeypatch.setattr(settings, "tax_rate", Decimal("0"))
    return testing_session_local


def _auth_headers(client: TestClient, username: str = "cashier") -> dict[str, str]:
    client.post("/api/v1/auth/register", json={"username": username, "password": "secret123"})
    login_response = client.post("/api/v1/auth/login", json={"username": username, "password": "secret123"})
    assert login_response.status_code == 200
    return {"Authorization": f"Bearer {login_response.json()['access_token']}"}


def _menu_ids(client: TestClient, headers: dict[str, str]) -> dict[str, int]:
    return {item["name"]: item["id"] for item in client.get("/api/v1/menu", headers=headers).json()}


def test_held_cart_can_be_recalled_exactly_once(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _auth_headers(client)
        menu = _menu_ids(client, headers)
        client.post("/api/v1/cart/items", json={"menu_item_id": menu["Banana Split"], "quantity": 2}, headers=headers)
        client.put("/api/v1/cart/details", json={"customer_name": "Asha", "table_number": "7"}, headers=headers)

        hold_response = client.post("/api/v1/cart/hold", json={"reason": "Paying later"}, headers=headers)
        assert hold_response.status_code == 201
        held = hold_response.json()
        assert held["id"].startswith("HLD-")
        assert held["customer_name"] == "Asha"
        assert Decimal(held["total"]) == Decimal("19.00")
        assert client.get("/api/v1/cart", headers=headers).json()["items"] == []

        listing = client.get("/api/v1/held-orders", headers=headers).json()
        assert [row["id"] for row in listing] == [held["id"]]

        recall_response = client.post(f"/api/v1/held-orders/{held['id']}/recall", headers=headers)
        assert recall_response.status_code == 200
        restored = recall_response.json()["cart"]
        assert restored["customer_name"] == "Asha"
        assert restored["table_number"] == "7"
        assert [(line["name"], line["quantity"]) for line in restored["items"]] == [("Banana Split", 2)]

        second_recall = client.post(f"/api/v1/held-orders/{held['id']}/recall", headers=headers)
        assert second_recall.status_code == 404
        assert client.get("/api/v1/held-orders", headers=headers).json() == []
        assert len(client.get("/api/v1/cart", headers=headers).json()["items"]) == 1

    verify_session: Session = testing_session_local()
    try:
        assert verify_session.query(HeldOrder).count() == 0
    finally:
        verify_session.close()


def test_recall_over_non_empty_cart_is_rejected(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _auth_headers(client)
        menu = _menu_ids(client, headers)
        client.post("/api/v1/cart/items", json={"menu_item_id": menu["Nuts"]}, headers=headers)
        held = client.post("/api/v1/cart/hold", json={}, headers=headers).json()
        client.post("/api/v1/cart/items", json={"menu_item_id": menu["Cherry"]}, headers=headers)

        conflict = client.post(f"/api/v1/held-orders/{held['id']}/recall", headers=headers)
        assert conflict.status_code == 409
        assert len(client.get("/api/v1/held-orders", headers=headers).json()) == 1

        assert client.post("/api/v1/cart/hold", json={}, headers=headers).status_code == 201
        client.delete("/api/v1/cart", headers=headers)
        assert client.post("/api/v1/cart/hold", json={}, headers=headers).status_code == 400


def test_held_records_are_private_to_their_owner(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        owner = _auth_headers(client, "owner")
        other = _auth_headers(client, "other")
        menu = _menu_ids(client, owner)
        client.post("/api/v1/cart/items", json={"menu_item_id": menu["Fresh Juice"]}, headers=owner)
        held = client.post("/api/v1/cart/hold", json={}, headers=owner).json()

        assert client.post(f"/api/v1/held-orders/{held['id']}/recall", headers=other).status_code == 404
        assert client.delete(f"/api/v1/held-orders/{held['id']}", headers=other).status_code == 404
        assert client.delete(f"/api/v1/held-orders/{held['id']}", headers=owner).status_code == 204
        assert client.get("/api/v1/held-orders", headers=owner).json() == []


def test_holding_a_placed_order_moves_it_to_held_and_back(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _auth_headers(client)
        menu = _menu_ids(client, headers)
        client.post("/api/v1/cart/items", json={"menu_item_id": menu["Hot Fudge Sundae"]}, headers=headers)
        order = client.post("/api/v1/cart/place", json={"order_type": "takeaway"}, headers=headers).json()
        assert order["status"] == "pending"
        assert order["payment_status"] == "pending"

        held = client.post(f"/api/v1/orders/{order['id']}/hold", json={"reason": "Kitchen backlog"}, headers=headers)
        assert held.status_code == 201
        held_id = held.json()["id"]
        assert held.json()["order_number"] == order["order_number"]
        assert client.get(f"/api/v1/orders/{order['id']}", headers=headers).json()["status"] == "held"

        blocked = client.patch(f"/api/v1/orders/{order['id']}/status", json={"status": "completed"}, headers=headers)
        assert blocked.status_code == 409

        notifications = client.get("/api/v1/notifications", headers=headers).json()
        assert [item["key"] for item in notifications["notifications"]] == [f"held-order-{held_id}"]
        assert notifications["notifications"][0]["order_number"] == order["order_number"]

        recalled = client.post(f"/api/v1/held-orders/{held_id}/recall", headers=headers).json()
        assert recalled["cart"] is None
        assert recalled["order"]["status"] == "pending"

        second = client.post(f"/api/v1/orders/{order['id']}/hold", json={}, headers=headers).json()
        assert client.delete(f"/api/v1/held-orders/{second['id']}", headers=headers).status_code == 204

    verify_session: Session = testing_session_local()
    try:
        assert verify_session.get(Order, order["id"]).status == "cancelled"
    finally:
        verify_session.close()

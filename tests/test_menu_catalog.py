"""Menu catalog API and seeding tests."""

from decimal import Decimal
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from scoop_pos.core.config import settings
from scoop_pos.db import session as db_session
from scoop_pos.db.base import Base
from scoop_pos.db.seed import DEFAULT_MENU, ensure_default_menu
from scoop_pos.main import app
from scoop_pos.models.menu import MenuItem


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup(tmp_path: Path, monkeypatch) -> sessionmaker:
    engine = _build_test_engine(tmp_path / "test_menu.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "local_state_path", str(tmp_path / "state.json"))
    return testing_session_local


def _auth_headers(client: TestClient, username: str, role: str) -> dict[str, str]:
    client.post("/api/v1/auth/register", json={"username": username, "password": "secret123", "role": role})
    token = client.post("/api/v1/auth/login", json={"username": username, "password": "secret123"}).json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def test_seed_runs_only_on_empty_catalog(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup(tmp_path, monkeypatch)

    with testing_session_local() as session:
        assert ensure_default_menu(session) == len(DEFAULT_MENU)
        assert ensure_default_menu(session) == 0
        assert session.query(MenuItem).count() == 17


def test_seed_can_be_disabled(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup(tmp_path, monkeypatch)
    monkeypatch.setattr(settings, "seed_menu", False)

    with testing_session_local() as session:
        assert ensure_default_menu(session) == 0
        assert session.query(MenuItem).count() == 0


def test_menu_listing_filters_and_orders(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _auth_headers(client, "cashier", "CASHIER")

        items = client.get("/api/v1/menu", headers=headers).json()
        assert [(item["category"], item["name"]) for item in items] == sorted(
            (item["category"], item["name"]) for item in items
        )

        sundaes = client.get("/api/v1/menu", params={"category": "Sundaes"}, headers=headers).json()
        assert {item["name"] for item in sundaes} == {"Strawberry Swirl Sundae", "Hot Fudge Sundae", "Banana Split"}

        found = client.get("/api/v1/menu", params={"search": "MILKSHAKE"}, headers=headers).json()
        assert {item["name"] for item in found} == {"Vanilla Milkshake", "Chocolate Milkshake"}

        assert len(client.get("/api/v1/menu", params={"category": "All"}, headers=headers).json()) == 17
        assert "Toppings" in client.get("/api/v1/menu/categories", headers=headers).json()


def test_catalog_writes_require_admin_and_valid_data(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        cashier = _auth_headers(client, "cashier", "CASHIER")
        admin = _auth_headers(client, "owner", "ADMIN")
        payload = {"name": "Pistachio Dream", "category": "Ice Cream Scoops", "price": "4.25"}

        assert client.post("/api/v1/menu", json=payload, headers=cashier).status_code == 403
        assert client.post("/api/v1/menu", json={**payload, "price": "0"}, headers=admin).status_code == 422
        assert client.post("/api/v1/menu", json={**payload, "name": ""}, headers=admin).status_code == 422
        assert client.post("/api/v1/menu", json={"name": "No category", "price": "2"}, headers=admin).status_code == 422

        created = client.post("/api/v1/menu", json=payload, headers=admin)
        assert created.status_code == 201
        item = created.json()
        assert Decimal(item["price"]) == Decimal("4.25")
        assert item["in_stock"] is True

        updated = client.patch(f"/api/v1/menu/{item['id']}", json={"price": "4.75", "in_stock": False}, headers=admin)
        assert updated.status_code == 200
        assert Decimal(updated.json()["price"]) == Decimal("4.75")
        assert updated.json()["name"] == "Pistachio Dream"

        out_of_stock = client.post("/api/v1/cart/items", json={"menu_item_id": item["id"]}, headers=cashier)
        assert out_of_stock.status_code == 409

        assert client.delete(f"/api/v1/menu/{item['id']}", headers=admin).status_code == 204
        assert client.get(f"/api/v1/menu/{item['id']}", headers=admin).status_code == 404
        assert client.patch("/api/v1/menu/9999", json={"price": "1"}, headers=admin).status_code == 404


def test_deleting_menu_item_keeps_order_line_snapshot(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)
    monkeypatch.setattr(settings, "tax_rate", Decimal("0"))

    with TestClient(app) as client:
        admin = _auth_headers(client, "owner", "ADMIN")
        item = client.post(
            "/api/v1/menu",
            json={"name": "Seasonal Mango", "category": "Sundaes", "price": "6.00"},
            headers=admin,
        ).json()
        client.post("/api/v1/cart/items", json={"menu_item_id": item["id"]}, headers=admin)
        order = client.post("/api/v1/cart/checkout", json={"payment_method": "cash"}, headers=admin).json()

        client.delete(f"/api/v1/menu/{item['id']}", headers=admin)

        stored = client.get(f"/api/v1/orders/{order['id']}", headers=admin).json()
        assert stored["items"][0]["name"] == "Seasonal Mango"
        assert Decimal(stored["items"][0]["unit_price"]) == Decimal("6.00")

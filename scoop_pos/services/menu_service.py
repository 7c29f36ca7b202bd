"""Menu catalog service helpers shared by API routes and seeding."""

from decimal import Decimal
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from scoop_pos.models.menu import MenuItem

EDITABLE_FIELDS: set[str] = {"name", "category", "description", "price", "in_stock", "stock_quantity"}


class MenuValidationError(Exception):
    """Raised when catalog data is missing a required field or has a bad price."""


class OutOfStockError(Exception):
    """Raised when an out-of-stock item is ordered."""


def _validate(name: str | None, category: str | None, price: Decimal | None) -> None:
    if not name or not name.strip():
        raise MenuValidationError("Item name is required")
    if not category or not category.strip():
        raise MenuValidationError("Category is required")
    if price is None or Decimal(price) <= 0:
        raise MenuValidationError("Price must be greater than 0")


def list_menu_items(db: Session, *, category: str | None = None, search: str | None = None) -> list[MenuItem]:
    """Return catalog ordered by category and name, optionally filtered."""
    query = db.query(MenuItem)
    if category and category != "All":
        query = query.filter(MenuItem.category == category)
    if search:
        query = query.filter(func.lower(MenuItem.name).contains(search.strip().lower()))
    return query.order_by(MenuItem.category.asc(), MenuItem.name.asc()).all()


def get_menu_item(db: Session, item_id: int) -> MenuItem | None:
    return db.get(MenuItem, item_id)


def get_orderable_item(db: Session, item_id: int) -> MenuItem | None:
    """Return menu item if it exists, raising when it is out of stock."""
    item = db.get(MenuItem, item_id)
    if item is not None and not item.in_stock:
        raise OutOfStockError(f"{item.name} is out of stock")
    return item


def create_menu_item(
    db: Session,
    *,
    name: str,
    category: str,
    price: Decimal,
    description: str | None = None,
    in_stock: bool = True,
    stock_quantity: int = 0,
) -> MenuItem:
    """Create and persist a menu item."""
    _validate(name, category, price)
    item = MenuItem(
        name=name.strip(),
        category=category.strip(),
        description=description,
        price=price,
        in_stock=in_stock,
        stock_quantity=stock_quantity,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_menu_item(db: Session, item: MenuItem, updates: dict[str, Any]) -> MenuItem:
    """Apply a partial update; the merged item must still be valid."""
    changes = {key: value for key, value in updates.items() if key in EDITABLE_FIELDS}
    _validate(
        changes.get("name", item.name),
        changes.get("category", item.category),
        changes.get("price", item.price),
    )
    for key, value in changes.items():
        setattr(item, key, value)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def delete_menu_item(db: Session, item: MenuItem) -> None:
    """Delete a menu item; order lines keep their own name and price snapshot."""
    db.delete(item)
    db.commit()

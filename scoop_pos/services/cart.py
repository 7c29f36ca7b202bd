"""In-memory order builder for a single checkout session."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


class EmptyCartError(Exception):
    """Raised when an operation needs at least one line in the cart."""


class InvalidDiscountError(Exception):
    """Raised when a discount is negative or larger than the subtotal."""


class InvalidQuantityError(Exception):
    """Raised when a line quantity is negative."""


class CartLineNotFoundError(Exception):
    """Raised when a cart line for a menu item does not exist."""


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Quantize a numeric value to two decimal places."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass
class CartLine:
    """Menu item snapshot plus quantity."""

    menu_item_id: int
    name: str
    unit_price: Decimal
    quantity: int = 1
    category: str | None = None

    @property
    def total_price(self) -> Decimal:
        return to_money(self.unit_price * self.quantity)

    def to_snapshot(self) -> dict[str, Any]:
        return {
            "menu_item_id": self.menu_item_id,
            "name": self.name,
            "category": self.category,
            "unit_price": str(to_money(self.unit_price)),
            "quantity": self.quantity,
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> CartLine:
        return cls(
            menu_item_id=int(data["menu_item_id"]),
            name=str(data["name"]),
            category=data.get("category"),
            unit_price=to_money(data["unit_price"]),
            quantity=int(data["quantity"]),
        )


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    discount: Decimal
    tax: Decimal
    total: Decimal


@dataclass
class Cart:
    """Ordered collection of cart lines keyed by menu item."""

    lines: list[CartLine] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.lines

    def find(self, menu_item_id: int) -> CartLine | None:
        for line in self.lines:
            if line.menu_item_id == menu_item_id:
                return line
        return None

    def add_item(
        self,
        *,
        menu_item_id: int,
        name: str,
        unit_price: Decimal,
        category: str | None = None,
        quantity: int = 1,
    ) -> CartLine:
        """Add a menu item or bump the quantity of its existing line."""
        if quantity < 1:
            raise InvalidQuantityError("Quantity must be >= 1")
        line = self.find(menu_item_id)
        if line is not None:
            line.quantity += quantity
            return line
        line = CartLine(
            menu_item_id=menu_item_id,
            name=name,
            category=category,
            unit_price=to_money(unit_price),
            quantity=quantity,
        )
        self.lines.append(line)
        return line

    def set_quantity(self, menu_item_id: int, quantity: int) -> CartLine | None:
        """Set the quantity of a line; zero removes the line and returns None."""
        if quantity < 0:
            raise InvalidQuantityError("Quantity must be >= 0")
        line = self.find(menu_item_id)
        if line is None:
            raise CartLineNotFoundError(f"Menu item {menu_item_id} is not in the cart")
        if quantity == 0:
            self.lines.remove(line)
            return None
        line.quantity = quantity
        return line

    def remove_item(self, menu_item_id: int) -> None:
        line = self.find(menu_item_id)
        if line is None:
            raise CartLineNotFoundError(f"Menu item {menu_item_id} is not in the cart")
        self.lines.remove(line)

    def clear(self) -> None:
        self.lines.clear()

    def subtotal(self) -> Decimal:
        return to_money(sum((line.unit_price * line.quantity for line in self.lines), ZERO))

    def totals(self, discount: Decimal = ZERO, tax_rate: Decimal = ZERO) -> CartTotals:
        """Compute subtotal, discount, tax and total.

        Tax is a percentage of the discounted subtotal. An over-discount is
        rejected instead of producing a negative total.
        """
        subtotal = self.subtotal()
        discount = to_money(discount)
        if discount < ZERO or discount > subtotal:
            raise InvalidDiscountError(f"Discount must be between 0 and {subtotal}")
        taxable = subtotal - discount
        tax = to_money(taxable * Decimal(tax_rate) / Decimal(100))
        total = max(to_money(taxable + tax), ZERO)
        return CartTotals(subtotal=subtotal, discount=discount, tax=tax, total=total)

    def total(self, discount: Decimal = ZERO, tax_rate: Decimal = ZERO) -> Decimal:
        return self.totals(discount, tax_rate).total


@dataclass
class CheckoutSession:
    """Active cart plus the transient checkout form fields."""

    cart: Cart = field(default_factory=Cart)
    customer_name: str | None = None
    customer_phone: str | None = None
    table_number: str | None = None
    discount: Decimal = ZERO

    def reset(self) -> None:
        self.cart.clear()
        self.customer_name = None
        self.customer_phone = None
        self.table_number = None
        self.discount = ZERO

    def totals(self, tax_rate: Decimal = ZERO) -> CartTotals:
        return self.cart.totals(self.discount, tax_rate)

    def to_snapshot(self) -> dict[str, Any]:
        return {
            "items": [line.to_snapshot() for line in self.cart.lines],
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "table_number": self.table_number,
            "discount": str(to_money(self.discount)),
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any] | None) -> CheckoutSession:
        if not data:
            return cls()
        lines = [CartLine.from_snapshot(item) for item in data.get("items") or []]
        return cls(
            cart=Cart(lines=lines),
            customer_name=data.get("customer_name"),
            customer_phone=data.get("customer_phone"),
            table_number=data.get("table_number"),
            discount=to_money(data.get("discount") or ZERO),
        )

"""Order builder tests."""

from decimal import Decimal

import pytest

from scoop_pos.services.cart import (
    Cart,
    CartLineNotFoundError,
    CheckoutSession,
    InvalidDiscountError,
    InvalidQuantityError,
)


def _cart() -> Cart:
    cart = Cart()
    cart.add_item(menu_item_id=1, name="Classic Vanilla Bean", unit_price=Decimal("3.50"), category="Ice Cream Scoops")
    cart.add_item(menu_item_id=1, name="Classic Vanilla Bean", unit_price=Decimal("3.50"), category="Ice Cream Scoops")
    cart.add_item(menu_item_id=3, name="Strawberry Swirl Sundae", unit_price=Decimal("8.50"), category="Sundaes")
    return cart


def test_adding_same_item_increments_quantity() -> None:
    cart = _cart()

    assert len(cart.lines) == 2
    assert cart.find(1).quantity == 2
    assert cart.find(1).total_price == Decimal("7.00")
    assert cart.subtotal() == Decimal("15.50")


def test_set_quantity_zero_removes_line() -> None:
    cart = _cart()

    assert cart.set_quantity(1, 0) is None
    assert cart.find(1) is None
    assert cart.subtotal() == Decimal("8.50")


def test_set_quantity_rejects_negative_and_unknown_lines() -> None:
    cart = _cart()

    with pytest.raises(InvalidQuantityError):
        cart.set_quantity(1, -1)
    with pytest.raises(CartLineNotFoundError):
        cart.set_quantity(99, 2)
    with pytest.raises(InvalidQuantityError):
        cart.add_item(menu_item_id=5, name="Cherry", unit_price=Decimal("0.25"), quantity=0)


def test_totals_apply_tax_to_discounted_subtotal() -> None:
    totals = _cart().totals(discount=Decimal("1.50"), tax_rate=Decimal("10"))

    assert totals.subtotal == Decimal("15.50")
    assert totals.discount == Decimal("1.50")
    assert totals.tax == Decimal("1.40")
    assert totals.total == Decimal("15.40")


def test_totals_without_tax_or_discount_equal_subtotal() -> None:
    assert _cart().total() == Decimal("15.50")
    assert Cart().total() == Decimal("0.00")


def test_discount_outside_subtotal_is_rejected() -> None:
    cart = _cart()

    with pytest.raises(InvalidDiscountError):
        cart.totals(discount=Decimal("15.51"))
    with pytest.raises(InvalidDiscountError):
        cart.totals(discount=Decimal("-1"))
    assert cart.totals(discount=Decimal("15.50")).total == Decimal("0.00")


def test_checkout_session_restores_from_snapshot() -> None:
    session = CheckoutSession(cart=_cart(), customer_name="Asha", table_number="4", discount=Decimal("2.00"))

    restored = CheckoutSession.from_snapshot(session.to_snapshot())

    assert restored.customer_name == "Asha"
    assert restored.table_number == "4"
    assert restored.discount == Decimal("2.00")
    assert [(line.menu_item_id, line.quantity) for line in restored.cart.lines] == [(1, 2), (3, 1)]
    assert restored.totals().total == Decimal("13.50")


def test_reset_clears_lines_and_form_fields() -> None:
    session = CheckoutSession(cart=_cart(), customer_name="Asha", discount=Decimal("1.00"))

    session.reset()

    assert session.cart.is_empty()
    assert session.customer_name is None
    assert session.discount == Decimal("0.00")
    assert CheckoutSession.from_snapshot(None).cart.is_empty()

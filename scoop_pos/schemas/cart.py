"""Active cart, checkout and split-bill schemas."""

from decimal import Decimal

from pydantic import BaseModel, Field

from scoop_pos.services.cart import CheckoutSession


class CartItemAdd(BaseModel):
    """Add a catalog item to the active cart."""

    menu_item_id: int
    quantity: int = Field(default=1, ge=1)


class CartItemQuantity(BaseModel):
    """Set a line quantity; zero removes the line."""

    quantity: int = Field(ge=0)


class CartDetailsUpdate(BaseModel):
    """Transient checkout form fields."""

    customer_name: str | None = None
    customer_phone: str | None = None
    table_number: str | None = None
    discount: Decimal = Field(default=Decimal("0"), ge=0)


class CartLineResponse(BaseModel):
    menu_item_id: int
    name: str
    category: str | None = None
    unit_price: Decimal
    quantity: int
    total_price: Decimal


class CartResponse(BaseModel):
    """Active cart with derived totals."""

    items: list[CartLineResponse]
    customer_name: str | None = None
    customer_phone: str | None = None
    table_number: str | None = None
    subtotal: Decimal
    discount: Decimal
    tax: Decimal
    total: Decimal

    @classmethod
    def from_session(cls, session: CheckoutSession, tax_rate: Decimal) -> "CartResponse":
        totals = session.totals(tax_rate)
        return cls(
            items=[
                CartLineResponse(
                    menu_item_id=line.menu_item_id,
                    name=line.name,
                    category=line.category,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    total_price=line.total_price,
                )
                for line in session.cart.lines
            ],
            customer_name=session.customer_name,
            customer_phone=session.customer_phone,
            table_number=session.table_number,
            subtotal=totals.subtotal,
            discount=totals.discount,
            tax=totals.tax,
            total=totals.total,
        )


class CheckoutRequest(BaseModel):
    payment_method: str
    order_type: str = "dine-in"


class PlaceOrderRequest(BaseModel):
    order_type: str = "dine-in"


class HoldRequest(BaseModel):
    reason: str | None = None


class SplitPreviewRequest(BaseModel):
    split_amount: Decimal = Field(ge=0)


class SplitPreviewResponse(BaseModel):
    total: Decimal
    split_amount: Decimal
    remaining: Decimal

"""Active cart, checkout and hold endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from scoop_pos.core.security import get_current_user
from scoop_pos.db.session import get_db
from scoop_pos.models.order import Order
from scoop_pos.models.user import User
from scoop_pos.schemas.cart import (
    CartDetailsUpdate,
    CartItemAdd,
    CartItemQuantity,
    CartResponse,
    CheckoutRequest,
    HoldRequest,
    PlaceOrderRequest,
    SplitPreviewRequest,
    SplitPreviewResponse,
)
from scoop_pos.schemas.held_order import HeldOrderResponse
from scoop_pos.schemas.order import OrderResponse
from scoop_pos.services.app_state import AppState, get_app_state
from scoop_pos.services.cart import (
    CartLineNotFoundError,
    CheckoutSession,
    EmptyCartError,
    InvalidDiscountError,
    InvalidQuantityError,
    to_money,
)
from scoop_pos.services.held_order_service import hold_active_cart
from scoop_pos.services.menu_service import OutOfStockError, get_orderable_item
from scoop_pos.services.order_service import CheckoutValidationError, SplitAmountError, checkout, place_order, split_remaining

router: APIRouter = APIRouter()


def _store(state: AppState, user_id: int, session: CheckoutSession) -> CartResponse:
    # Removing lines can leave a discount larger than the new subtotal.
    session.discount = min(session.discount, session.cart.subtotal())
    state.save_session(user_id, session)
    return CartResponse.from_session(session, state.tax_rate)


@router.get("", response_model=CartResponse)
def get_cart(
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> CartResponse:
    return CartResponse.from_session(state.load_session(current_user.id), state.tax_rate)


@router.post("/items", response_model=CartResponse)
def add_cart_item(
    payload: CartItemAdd,
    db: Session = Depends(get_db),
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> CartResponse:
    """Add a catalog item or bump the quantity of its line."""
    try:
        item = get_orderable_item(db, payload.menu_item_id)
    except OutOfStockError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")

    with state.lock:
        session = state.load_session(current_user.id)
        session.cart.add_item(
            menu_item_id=item.id,
            name=item.name,
            category=item.category,
            unit_price=item.price,
            quantity=payload.quantity,
        )
        return _store(state, current_user.id, session)


@router.patch("/items/{menu_item_id}", response_model=CartResponse)
def set_cart_item_quantity(
    menu_item_id: int,
    payload: CartItemQuantity,
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> CartResponse:
    with state.lock:
        session = state.load_session(current_user.id)
        try:
            session.cart.set_quantity(menu_item_id, payload.quantity)
        except CartLineNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        except InvalidQuantityError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        return _store(state, current_user.id, session)


@router.delete("/items/{menu_item_id}", response_model=CartResponse)
def remove_cart_item(
    menu_item_id: int,
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> CartResponse:
    with state.lock:
        session = state.load_session(current_user.id)
        try:
            session.cart.remove_item(menu_item_id)
        except CartLineNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        return _store(state, current_user.id, session)


@router.put("/details", response_model=CartResponse)
def update_cart_details(
    payload: CartDetailsUpdate,
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> CartResponse:
    """Set customer fields and discount; the discount may not exceed the subtotal."""
    with state.lock:
        session = state.load_session(current_user.id)
        session.customer_name = payload.customer_name or None
        session.customer_phone = payload.customer_phone or None
        session.table_number = payload.table_number or None
        session.discount = to_money(payload.discount)
        try:
            response = CartResponse.from_session(session, state.tax_rate)
        except InvalidDiscountError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        state.save_session(current_user.id, session)
        return response


@router.delete("", response_model=CartResponse)
def clear_cart(
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> CartResponse:
    with state.lock:
        state.clear_session(current_user.id)
    return CartResponse.from_session(CheckoutSession(), state.tax_rate)


@router.post("/split", response_model=SplitPreviewResponse)
def preview_split(
    payload: SplitPreviewRequest,
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> SplitPreviewResponse:
    """Balance left after a partial payment. Nothing is stored."""
    total = state.load_session(current_user.id).totals(state.tax_rate).total
    try:
        remaining = split_remaining(total, payload.split_amount)
    except SplitAmountError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return SplitPreviewResponse(total=total, split_amount=to_money(payload.split_amount), remaining=remaining)


@router.post("/hold", response_model=HeldOrderResponse, status_code=status.HTTP_201_CREATED)
def hold_cart(
    payload: HoldRequest,
    db: Session = Depends(get_db),
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> HeldOrderResponse:
    try:
        held = hold_active_cart(db, state, owner_id=current_user.id, reason=payload.reason)
    except EmptyCartError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return HeldOrderResponse.from_held(held)


@router.post("/checkout", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def checkout_cart(
    payload: CheckoutRequest,
    db: Session = Depends(get_db),
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> Order:
    """Complete payment: persist a paid order and clear the cart."""
    with state.lock:
        session = state.load_session(current_user.id)
        try:
            order = checkout(
                db,
                session,
                owner_id=current_user.id,
                payment_method=payload.payment_method,
                order_type=payload.order_type,
                tax_rate=state.tax_rate,
            )
        except (EmptyCartError, CheckoutValidationError, InvalidDiscountError) as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        state.clear_session(current_user.id)
    return order


@router.post("/place", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def place_cart_order(
    payload: PlaceOrderRequest,
    db: Session = Depends(get_db),
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> Order:
    """Send the cart to the kitchen as an unpaid pending order."""
    with state.lock:
        session = state.load_session(current_user.id)
        try:
            order = place_order(
                db,
                session,
                owner_id=current_user.id,
                order_type=payload.order_type,
                tax_rate=state.tax_rate,
            )
        except (EmptyCartError, CheckoutValidationError, InvalidDiscountError) as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        state.clear_session(current_user.id)
    return order

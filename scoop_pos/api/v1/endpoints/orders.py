"""Order endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from scoop_pos.core.security import get_current_user
from scoop_pos.db.session import get_db
from scoop_pos.models.order import Order
from scoop_pos.models.user import User
from scoop_pos.schemas.cart import HoldRequest
from scoop_pos.schemas.held_order import HeldOrderResponse
from scoop_pos.schemas.order import OrderListResponse, OrderPaymentRequest, OrderResponse, OrderStatusUpdate
from scoop_pos.services.cart import to_money
from scoop_pos.services.held_order_service import hold_order
from scoop_pos.services.order_service import (
    CheckoutValidationError,
    OrderAlreadyPaidError,
    change_order_status,
    get_order,
    list_orders,
    pay_order,
    recent_orders,
)
from scoop_pos.services.order_status import ORDER_STATUSES, InvalidStatusTransitionError
from scoop_pos.services.revenue import is_completed_sale

router: APIRouter = APIRouter()


def _get_owned_order(db: Session, order_id: int, current_user: User) -> Order:
    order = get_order(db, order_id, current_user.id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


@router.get("", response_model=OrderListResponse)
def get_orders(
    search: str | None = Query(default=None),
    order_type: str | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> OrderListResponse:
    """Orders newest first with the revenue of completed rows in the filter."""
    orders = list_orders(db, current_user.id, search=search, order_type=order_type)
    total_revenue = to_money(sum((order.total_amount for order in orders if is_completed_sale(order)), Decimal("0")))
    return OrderListResponse(
        orders=[OrderResponse.model_validate(order) for order in orders],
        total_revenue=total_revenue,
    )


@router.get("/recent", response_model=list[OrderResponse])
def get_recent_orders(
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Order]:
    return recent_orders(db, current_user.id, limit=limit)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Order:
    return _get_owned_order(db, order_id, current_user)


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Order:
    new_status = payload.status.strip().lower()
    if new_status not in ORDER_STATUSES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown order status")
    order = _get_owned_order(db, order_id, current_user)
    try:
        return change_order_status(db, order, new_status)
    except InvalidStatusTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.post("/{order_id}/pay", response_model=OrderResponse)
def settle_order(
    order_id: int,
    payload: OrderPaymentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Order:
    order = _get_owned_order(db, order_id, current_user)
    try:
        return pay_order(db, order, payment_method=payload.payment_method)
    except CheckoutValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except (OrderAlreadyPaidError, InvalidStatusTransitionError) as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.post("/{order_id}/hold", response_model=HeldOrderResponse, status_code=status.HTTP_201_CREATED)
def hold_existing_order(
    order_id: int,
    payload: HoldRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> HeldOrderResponse:
    """Park a pending order until it is recalled."""
    order = _get_owned_order(db, order_id, current_user)
    try:
        held = hold_order(db, order, owner_id=current_user.id, reason=payload.reason)
    except InvalidStatusTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return HeldOrderResponse.from_held(held)

"""Advance order booking endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from scoop_pos.core.security import get_current_user
from scoop_pos.db.session import get_db
from scoop_pos.models.advance_order import AdvanceOrder
from scoop_pos.models.user import User
from scoop_pos.schemas.advance_order import AdvanceOrderCreate, AdvanceOrderResponse, AdvanceOrderStatusUpdate
from scoop_pos.services.advance_order_service import (
    AdvanceOrderValidationError,
    BookingLine,
    MenuItemNotFoundError,
    change_advance_status,
    create_advance_order,
    get_advance_order,
    list_advance_orders,
)
from scoop_pos.services.cart import EmptyCartError
from scoop_pos.services.menu_service import OutOfStockError
from scoop_pos.services.order_status import ADVANCE_ORDER_STATUSES, InvalidStatusTransitionError

router: APIRouter = APIRouter()


@router.get("", response_model=list[AdvanceOrderResponse])
def get_advance_orders(
    status_filter: str | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[AdvanceOrder]:
    """Bookings ordered by delivery date."""
    return list_advance_orders(db, current_user.id, status=status_filter)


@router.post("", response_model=AdvanceOrderResponse, status_code=status.HTTP_201_CREATED)
def book_advance_order(
    payload: AdvanceOrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AdvanceOrder:
    try:
        return create_advance_order(
            db,
            owner_id=current_user.id,
            customer_name=payload.customer_name,
            customer_phone=payload.customer_phone,
            customer_email=payload.customer_email,
            delivery_date=payload.delivery_date,
            delivery_time=payload.delivery_time,
            special_instructions=payload.special_instructions,
            advance_amount=payload.advance_amount,
            lines=[BookingLine(menu_item_id=item.menu_item_id, quantity=item.quantity) for item in payload.items],
        )
    except MenuItemNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except OutOfStockError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except (AdvanceOrderValidationError, EmptyCartError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/{order_id}", response_model=AdvanceOrderResponse)
def get_advance_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AdvanceOrder:
    order = get_advance_order(db, order_id, current_user.id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Advance order not found")
    return order


@router.patch("/{order_id}/status", response_model=AdvanceOrderResponse)
def update_advance_order_status(
    order_id: int,
    payload: AdvanceOrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AdvanceOrder:
    new_status = payload.status.strip().lower()
    if new_status not in ADVANCE_ORDER_STATUSES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown advance order status")
    order = get_advance_order(db, order_id, current_user.id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Advance order not found")
    try:
        return change_advance_status(db, order, new_status)
    except InvalidStatusTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

"""Held order endpoints: list, recall and discard."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from scoop_pos.core.security import get_current_user
from scoop_pos.db.session import get_db
from scoop_pos.models.user import User
from scoop_pos.schemas.cart import CartResponse
from scoop_pos.schemas.held_order import HeldOrderResponse, RecallResponse
from scoop_pos.schemas.order import OrderResponse
from scoop_pos.services.app_state import AppState, get_app_state
from scoop_pos.services.held_order_service import (
    ActiveCartNotEmptyError,
    HeldOrderNotFoundError,
    delete_held_order,
    list_held_orders,
    recall_held_order,
)
from scoop_pos.services.order_status import InvalidStatusTransitionError

router: APIRouter = APIRouter()


@router.get("", response_model=list[HeldOrderResponse])
def get_held_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[HeldOrderResponse]:
    """Held records, newest first."""
    return [HeldOrderResponse.from_held(held) for held in list_held_orders(db, current_user.id)]


@router.post("/{held_id}/recall", response_model=RecallResponse)
def recall(
    held_id: str,
    db: Session = Depends(get_db),
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> RecallResponse:
    """Restore a held cart into the active cart, or return a held order to pending."""
    try:
        result = recall_held_order(db, state, held_id=held_id, owner_id=current_user.id)
    except HeldOrderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (ActiveCartNotEmptyError, InvalidStatusTransitionError) as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return RecallResponse(
        held_id=result.held_id,
        cart=CartResponse.from_session(result.session, state.tax_rate) if result.session is not None else None,
        order=OrderResponse.model_validate(result.order) if result.order is not None else None,
    )


@router.delete("/{held_id}", status_code=status.HTTP_204_NO_CONTENT)
def discard_held_order(
    held_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    try:
        delete_held_order(db, held_id=held_id, owner_id=current_user.id)
    except HeldOrderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)

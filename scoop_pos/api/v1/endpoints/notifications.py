"""Notification feed endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scoop_pos.core.security import get_current_user
from scoop_pos.db.session import get_db
from scoop_pos.models.user import User
from scoop_pos.schemas.notification import MarkReadResponse, NotificationFeedResponse, NotificationResponse
from scoop_pos.services.advance_order_service import list_advance_orders
from scoop_pos.services.app_state import AppState, get_app_state
from scoop_pos.services.held_order_service import list_held_orders
from scoop_pos.services.notification_service import Notification, build_notifications, unread_count
from scoop_pos.utils.time import utcnow

router: APIRouter = APIRouter()


def _feed(db: Session, state: AppState, user_id: int) -> tuple[list[Notification], set[str]]:
    read_keys = state.read_notifications(user_id)
    notifications = build_notifications(
        list_advance_orders(db, user_id),
        list_held_orders(db, user_id),
        read_keys,
        utcnow(),
    )
    return notifications, read_keys


@router.get("", response_model=NotificationFeedResponse)
def get_notifications(
    db: Session = Depends(get_db),
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> NotificationFeedResponse:
    notifications, read_keys = _feed(db, state, current_user.id)
    return NotificationFeedResponse(
        notifications=[NotificationResponse.model_validate(notification) for notification in notifications],
        unread_count=unread_count(notifications, read_keys),
    )


@router.post("/{key}/read", response_model=MarkReadResponse)
def mark_notification_read(
    key: str,
    db: Session = Depends(get_db),
    state: AppState = Depends(get_app_state),
    current_user: User = Depends(get_current_user),
) -> MarkReadResponse:
    """Add the key to the read set; repeating the call changes nothing."""
    newly_read = state.mark_read(current_user.id, key)
    notifications, read_keys = _feed(db, state, current_user.id)
    return MarkReadResponse(key=key, newly_read=newly_read, unread_count=unread_count(notifications, read_keys))

"""Explicit application state shared by API requests."""

from __future__ import annotations

import logging
import threading
from decimal import Decimal, InvalidOperation

from fastapi import Request

from scoop_pos.core.config import Settings
from scoop_pos.services.cart import CheckoutSession
from scoop_pos.services.local_state import LocalStateStore

logger = logging.getLogger(__name__)

ACTIVE_CART_KEY: str = "activeCart:{user_id}"
READ_NOTIFICATIONS_KEY: str = "readNotifications:{user_id}"


class AppState:
    """Per-terminal state: active checkout sessions and notification read sets.

    ``lock`` serializes multi-step mutations (recall) that touch both this
    state and the database.
    """

    def __init__(self, store: LocalStateStore, tax_rate: Decimal = Decimal("0")) -> None:
        self.store = store
        self.tax_rate = tax_rate
        self.lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings) -> AppState:
        return cls(LocalStateStore(settings.local_state_path), tax_rate=settings.tax_rate)

    def load(self) -> None:
        self.store.load()

    def load_session(self, user_id: int) -> CheckoutSession:
        raw = self.store.get(ACTIVE_CART_KEY.format(user_id=user_id))
        try:
            return CheckoutSession.from_snapshot(raw)
        except (KeyError, TypeError, ValueError, InvalidOperation):
            logger.exception("[STATE] Dropping unreadable cart for user_id=%s", user_id)
            return CheckoutSession()

    def save_session(self, user_id: int, session: CheckoutSession) -> None:
        self.store.set(ACTIVE_CART_KEY.format(user_id=user_id), session.to_snapshot())

    def clear_session(self, user_id: int) -> None:
        self.store.delete(ACTIVE_CART_KEY.format(user_id=user_id))

    def read_notifications(self, user_id: int) -> set[str]:
        raw = self.store.get(READ_NOTIFICATIONS_KEY.format(user_id=user_id), [])
        if not isinstance(raw, list):
            logger.error("[STATE] Read notification set for user_id=%s is not a list; ignoring.", user_id)
            return set()
        return {str(key) for key in raw}

    def mark_read(self, user_id: int, key: str) -> bool:
        """Add key to the read set; return False when it was already there."""
        with self.lock:
            read_keys = self.read_notifications(user_id)
            if key in read_keys:
                return False
            read_keys.add(key)
            self.store.set(READ_NOTIFICATIONS_KEY.format(user_id=user_id), sorted(read_keys))
            return True


def get_app_state(request: Request) -> AppState:
    """Return the state object constructed at startup."""
    return request.app.state.pos

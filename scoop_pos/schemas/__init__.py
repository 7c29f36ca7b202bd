"""Schema exports."""

from scoop_pos.schemas.advance_order import (
    AdvanceOrderCreate,
    AdvanceOrderItemPayload,
    AdvanceOrderResponse,
    AdvanceOrderStatusUpdate,
)
from scoop_pos.schemas.auth import AuthUserResponse, LoginRequest, RegisterRequest, TokenResponse
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
from scoop_pos.schemas.held_order import HeldOrderResponse, RecallResponse
from scoop_pos.schemas.menu import MenuItemCreate, MenuItemResponse, MenuItemUpdate
from scoop_pos.schemas.notification import MarkReadResponse, NotificationFeedResponse, NotificationResponse
from scoop_pos.schemas.order import OrderListResponse, OrderPaymentRequest, OrderResponse, OrderStatusUpdate
from scoop_pos.schemas.report import DashboardResponse, ReportResponse

__all__ = [
    "AdvanceOrderCreate",
    "AdvanceOrderItemPayload",
    "AdvanceOrderResponse",
    "AdvanceOrderStatusUpdate",
    "AuthUserResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "CartDetailsUpdate",
    "CartItemAdd",
    "CartItemQuantity",
    "CartResponse",
    "CheckoutRequest",
    "HoldRequest",
    "PlaceOrderRequest",
    "SplitPreviewRequest",
    "SplitPreviewResponse",
    "HeldOrderResponse",
    "RecallResponse",
    "MenuItemCreate",
    "MenuItemResponse",
    "MenuItemUpdate",
    "MarkReadResponse",
    "NotificationFeedResponse",
    "NotificationResponse",
    "OrderListResponse",
    "OrderPaymentRequest",
    "OrderResponse",
    "OrderStatusUpdate",
    "DashboardResponse",
    "ReportResponse",
]

"""API v1 router composition."""

from fastapi import APIRouter

from scoop_pos.api.v1.endpoints import (
    advance_orders,
    auth,
    cart,
    dashboard,
    held_orders,
    menu,
    notifications,
    orders,
    reports,
)

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(menu.router, prefix="/menu", tags=["menu"])
api_router.include_router(cart.router, prefix="/cart", tags=["cart"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(held_orders.router, prefix="/held-orders", tags=["held-orders"])
api_router.include_router(advance_orders.router, prefix="/advance-orders", tags=["advance-orders"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])

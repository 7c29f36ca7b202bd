"""Application models package."""

from scoop_pos.models.advance_order import AdvanceOrder, AdvanceOrderItem
from scoop_pos.models.held_order import HeldOrder
from scoop_pos.models.menu import MenuItem
from scoop_pos.models.order import Order, OrderItem
from scoop_pos.models.user import User

__all__ = ["User", "MenuItem", "Order", "OrderItem", "AdvanceOrder", "AdvanceOrderItem", "HeldOrder"]

"""Held (parked) order model."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scoop_pos.db.base import Base
from scoop_pos.models.order import Order


class HeldOrder(Base):
    """Parked cart snapshot or a reference to a parked pending order.

    Exactly one of ``snapshot`` and ``original_order_id`` is set.
    """

    __tablename__ = "held_orders"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    held_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    held_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    original_order_id: Mapped[int | None] = mapped_column(ForeignKey("orders.id"), nullable=True)
    snapshot: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    original_order: Mapped[Order | None] = relationship()

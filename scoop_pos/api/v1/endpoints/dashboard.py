"""Dashboard endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scoop_pos.core.security import get_current_user
from scoop_pos.db.session import get_db
from scoop_pos.models.user import User
from scoop_pos.schemas.advance_order import AdvanceOrderResponse
from scoop_pos.schemas.order import OrderResponse
from scoop_pos.schemas.report import DashboardResponse, PeriodStatsResponse
from scoop_pos.services.dashboard_service import latest_sales, period_stats, upcoming_advance_orders
from scoop_pos.services.report_service import load_sales_records
from scoop_pos.utils.time import utcnow

router: APIRouter = APIRouter()


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DashboardResponse:
    """Today, week and month figures recomputed from stored orders."""
    now = utcnow()
    orders, advance_orders = load_sales_records(db, current_user.id)
    return DashboardResponse(
        generated_at=now,
        stats=[PeriodStatsResponse.model_validate(stats) for stats in period_stats(orders, advance_orders, now)],
        recent_orders=[OrderResponse.model_validate(order) for order in latest_sales(orders)],
        upcoming_advance_orders=[
            AdvanceOrderResponse.model_validate(order) for order in upcoming_advance_orders(advance_orders)
        ],
    )

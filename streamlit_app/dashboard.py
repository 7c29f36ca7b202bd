"""Live sales dashboard; re-reads the database every refresh interval."""

import time

import streamlit as st
from sqlalchemy import select

from scoop_pos.core.config import settings
from scoop_pos.models import User
from scoop_pos.services.dashboard_service import latest_sales, period_stats, upcoming_advance_orders
from scoop_pos.services.report_service import load_sales_records
from scoop_pos.utils.time import utcnow
from streamlit_app.common import get_session, money, now_string

st.set_page_config(page_title="Scoop POS Dashboard", layout="wide")
st.title("Dashboard")
st.caption(f"Last refresh: {now_string()} (every {settings.dashboard_refresh_seconds}s)")

with get_session() as db:
    users = db.scalars(select(User).where(User.is_active.is_(True)).order_by(User.username)).all()
    if not users:
        st.info("No operators registered yet.")
        st.stop()

    user_map = {f"{user.username} ({user.role})": user.id for user in users}
    selected = st.selectbox("Operator", list(user_map.keys()))
    now = utcnow()
    orders, advance_orders = load_sales_records(db, user_map[selected])

    for column, stats in zip(st.columns(3), period_stats(orders, advance_orders, now)):
        with column:
            st.metric(f"{stats.period.title()} revenue", money(stats.revenue))
            st.write(f"Orders: {stats.orders} | Customers: {stats.customers}")

    st.subheader("Recent orders")
    st.dataframe(
        [
            {
                "Order": order.order_number,
                "Customer": order.customer_name or "Walk-in Customer",
                "Type": order.order_type,
                "Total": money(order.total_amount),
                "Payment": order.payment_method,
            }
            for order in latest_sales(orders)
        ],
        use_container_width=True,
    )

    st.subheader("Upcoming advance orders")
    for booking in upcoming_advance_orders(advance_orders):
        st.write(
            f"• {booking.delivery_date:%d %b %Y} {booking.customer_name} "
            f"({booking.status}) {money(booking.total_amount)}"
        )

time.sleep(settings.dashboard_refresh_seconds)
st.rerun()

"""
Dashboard statistics aggregation.
"""
import logging
from datetime import datetime, time, timedelta
from decimal import Decimal

import pytz
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from backoffice.core.formatting import local_today
from backoffice.models.menu import MenuItem
from backoffice.models.order import ACTIVE_ORDER_STATUSES, Order, OrderStatus
from backoffice.models.reservation import Reservation, ReservationStatus

logger = logging.getLogger(__name__)


class StatsService:
    """
    Builds the numbers shown on the dashboard header.

    "Today" is the restaurant-local calendar day. Orders store naive UTC
    timestamps, so the local day is converted to a UTC window first.
    """

    def __init__(self, db: Session, tz_name: str):
        self.db = db
        self.tz_name = tz_name

    def _utc_window(self, day):
        tz = pytz.timezone(self.tz_name)
        start_local = tz.localize(datetime.combine(day, time.min))
        end_local = tz.localize(datetime.combine(day + timedelta(days=1), time.min))
        return (
            start_local.astimezone(pytz.UTC).replace(tzinfo=None),
            end_local.astimezone(pytz.UTC).replace(tzinfo=None),
        )

    def collect(self) -> dict:
        today = local_today(self.tz_name)
        start, end = self._utc_window(today)

        todays_orders = self.db.execute(
            select(Order).where(Order.created_at >= start, Order.created_at < end)
        ).scalars().all()
        sales_today = sum(
            (order.total for order in todays_orders if order.status != OrderStatus.CANCELLED.value),
            Decimal("0.00"),
        )

        status_counts = dict(
            self.db.execute(select(Order.status, func.count(Order.id)).group_by(Order.status)).all()
        )
        active_orders = sum(status_counts.get(s.value, 0) for s in ACTIVE_ORDER_STATUSES)

        reservation_counts = dict(
            self.db.execute(
                select(Reservation.status, func.count(Reservation.id))
                .where(Reservation.date == today)
                .group_by(Reservation.status)
            ).all()
        )

        menu_items = self.db.execute(select(func.count(MenuItem.id))).scalar_one()
        available_items = self.db.execute(
            select(func.count(MenuItem.id)).where(MenuItem.stock > 0)
        ).scalar_one()

        stats = {
            "date": today,
            "sales_today": sales_today,
            "orders_today": len(todays_orders),
            "active_orders": active_orders,
            "pending_orders": status_counts.get(OrderStatus.PENDING.value, 0),
            "reservations_today": sum(reservation_counts.values()),
            "confirmed_reservations_today": reservation_counts.get(ReservationStatus.CONFIRMED.value, 0),
            "menu_items": menu_items,
            "available_items": available_items,
        }
        logger.debug("Dashboard stats: %s", stats)
        return stats

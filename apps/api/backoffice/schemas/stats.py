"""
Dashboard statistics schema.
"""
from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class DashboardStats(BaseModel):
    date: date
    sales_today: Decimal
    orders_today: int
    active_orders: int
    pending_orders: int
    reservations_today: int
    confirmed_reservations_today: int
    menu_items: int
    available_items: int

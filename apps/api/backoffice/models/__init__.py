"""
SQLAlchemy models for the back-office.
"""
from backoffice.models.menu import MenuItem
from backoffice.models.order import Order, OrderStatus
from backoffice.models.reservation import Reservation, ReservationStatus

__all__ = [
    "MenuItem",
    "Order",
    "OrderStatus",
    "Reservation",
    "ReservationStatus",
]

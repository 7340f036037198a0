"""
Python client for the back-office API: the dashboard's data layer.
"""
from backoffice.client.api import ApiClient, ApiResponse
from backoffice.client.cart import OrderCart
from backoffice.client.refresh import AutoRefresher
from backoffice.client.request_state import (
    MENU,
    ORDERS,
    RESERVATIONS,
    RequestStateStore,
    get_default_store,
)
from backoffice.client.services import (
    DashboardStats,
    MenuService,
    OrdersService,
    ReservationsService,
    ServiceError,
)

__all__ = [
    "ApiClient",
    "ApiResponse",
    "AutoRefresher",
    "DashboardStats",
    "MENU",
    "MenuService",
    "ORDERS",
    "OrderCart",
    "OrdersService",
    "RESERVATIONS",
    "RequestStateStore",
    "ReservationsService",
    "ServiceError",
    "get_default_store",
]

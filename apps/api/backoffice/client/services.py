"""
Dashboard-side services for menu, orders and reservations.

Each service turns failed API calls into ``ServiceError`` and invalidates
its entry in the request-state store after any mutation, so lists are
fetched again after a change.
"""
import logging
from datetime import date
from typing import List, Optional, Union

from backoffice.client.api import ApiClient, ApiResponse
from backoffice.client.cart import OrderCart
from backoffice.client.request_state import (
    MENU,
    ORDERS,
    RESERVATIONS,
    RequestStateStore,
    get_default_store,
)
from backoffice.core.config import get_settings
from backoffice.core.formatting import local_date, local_today

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    pass


def _unwrap(response: ApiResponse, fallback: str):
    if not response.success:
        raise ServiceError(response.error or fallback)
    return response.data


class _BaseService:
    """
    Services built without a ``store`` share the process-wide default one,
    so a mutation in one service reaches the lists of the others.
    """
    key: str = ""

    def __init__(
        self,
        api: Optional[ApiClient] = None,
        store: Optional[RequestStateStore] = None,
        tz_name: Optional[str] = None,
    ):
        self.api = api or ApiClient()
        self.store = store or get_default_store()
        self.tz_name = tz_name or get_settings().RESTAURANT_TIMEZONE

    def get_all(self) -> List[dict]:
        raise NotImplementedError

    def fetch_if_needed(self) -> Optional[List[dict]]:
        """
        Fetch the list unless another caller already did.

        Returns None when the fetch was skipped. A failed fetch releases
        the key so the next caller retries.
        """
        if not self.store.should_fetch(self.key):
            return None
        try:
            return self.get_all()
        except ServiceError:
            self.store.invalidate(self.key)
            raise

    def _changed(self, *keys: str) -> None:
        for key in keys or (self.key,):
            self.store.invalidate(key)


class MenuService(_BaseService):
    key = MENU

    def get_all(self, order_by: str = "id") -> List[dict]:
        return _unwrap(self.api.get_menu_items(order_by=order_by), "Failed to fetch menu items")

    def get_by_id(self, item_id: int) -> Optional[dict]:
        response = self.api.get_menu_item(item_id)
        if response.status_code == 404:
            return None
        return _unwrap(response, "Failed to fetch menu item")

    def create(self, item: dict) -> dict:
        created = _unwrap(self.api.create_menu_item(item), "Failed to create menu item")
        self._changed()
        return created

    def update(self, item_id: int, item: dict) -> dict:
        updated = _unwrap(self.api.update_menu_item(item_id, item), "Failed to update menu item")
        self._changed()
        return updated

    def patch(self, item_id: int, changes: dict) -> dict:
        updated = _unwrap(self.api.patch_menu_item(item_id, changes), "Failed to update menu item")
        self._changed()
        return updated

    def delete(self, item_id: int) -> bool:
        _unwrap(self.api.delete_menu_item(item_id), "Failed to delete menu item")
        self._changed()
        return True

    def update_stock(self, item_id: int, stock: int) -> dict:
        updated = _unwrap(self.api.update_menu_item_stock(item_id, stock), "Failed to update stock")
        self._changed()
        return updated

    def by_category(self, category: str) -> List[dict]:
        return [item for item in self.get_all() if item.get("category") == category]

    def available(self) -> List[dict]:
        return [item for item in self.get_all() if item.get("available")]


class OrdersService(_BaseService):
    key = ORDERS

    def get_all(self, status: Optional[str] = None) -> List[dict]:
        params = {"status": status} if status else {}
        return _unwrap(self.api.get_orders(**params), "Failed to fetch orders")

    def get_by_id(self, order_id: int) -> Optional[dict]:
        response = self.api.get_order(order_id)
        if response.status_code == 404:
            return None
        return _unwrap(response, "Failed to fetch order")

    def create(self, order: Union[dict, OrderCart], **customer) -> dict:
        """Place an order from a payload dict, or from a cart plus customer fields."""
        payload = order.to_payload(**customer) if isinstance(order, OrderCart) else order
        created = _unwrap(self.api.create_order(payload), "Failed to create order")
        # Placing an order also changes menu stock
        self._changed(ORDERS, MENU)
        return created

    def update_status(self, order_id: int, status: str) -> dict:
        updated = _unwrap(self.api.update_order_status(order_id, status), "Failed to update order status")
        self._changed()
        return updated

    def by_status(self, status: str) -> List[dict]:
        return self.get_all(status=status)

    def active(self) -> List[dict]:
        """Orders neither delivered nor cancelled."""
        return [o for o in self.get_all() if o.get("status") not in ("delivered", "cancelled")]

    def today(self) -> List[dict]:
        today = local_today(self.tz_name)
        return [o for o in self.get_all() if local_date(o.get("created_at"), self.tz_name) == today]

    def this_month(self) -> List[dict]:
        today = local_today(self.tz_name)
        result = []
        for order in self.get_all():
            created = local_date(order.get("created_at"), self.tz_name)
            if created and (created.year, created.month) == (today.year, today.month):
                result.append(order)
        return result


class ReservationsService(_BaseService):
    key = RESERVATIONS

    def get_all(self, on_date: Optional[date] = None, status: Optional[str] = None) -> List[dict]:
        params = {}
        if on_date:
            params["date"] = on_date.isoformat()
        if status:
            params["status"] = status
        return _unwrap(self.api.get_reservations(**params), "Failed to fetch reservations")

    def get_by_id(self, reservation_id: int) -> Optional[dict]:
        response = self.api.get_reservation(reservation_id)
        if response.status_code == 404:
            return None
        return _unwrap(response, "Failed to fetch reservation")

    def create(self, reservation: dict) -> dict:
        created = _unwrap(self.api.create_reservation(reservation), "Failed to create reservation")
        self._changed()
        return created

    def update(self, reservation_id: int, reservation: dict) -> dict:
        updated = _unwrap(
            self.api.update_reservation(reservation_id, reservation), "Failed to update reservation"
        )
        self._changed()
        return updated

    def delete(self, reservation_id: int) -> bool:
        _unwrap(self.api.delete_reservation(reservation_id), "Failed to delete reservation")
        self._changed()
        return True

    def update_status(self, reservation_id: int, status: str) -> dict:
        updated = _unwrap(
            self.api.update_reservation_status(reservation_id, status),
            "Failed to update reservation status",
        )
        self._changed()
        return updated

    @staticmethod
    def filter_by_date(reservations: List[dict], on_date: date, tz_name: str) -> List[dict]:
        """Reservations whose stored date, in restaurant-local time, is ``on_date``."""
        return [r for r in reservations if local_date(r.get("date"), tz_name) == on_date]

    def by_date(self, on_date: date) -> List[dict]:
        return self.filter_by_date(self.get_all(), on_date, self.tz_name)

    def today(self) -> List[dict]:
        return self.by_date(local_today(self.tz_name))

    def this_month(self) -> List[dict]:
        today = local_today(self.tz_name)
        result = []
        for reservation in self.get_all():
            booked = local_date(reservation.get("date"), self.tz_name)
            if booked and (booked.year, booked.month) == (today.year, today.month):
                result.append(reservation)
        return result

    def confirmed(self) -> List[dict]:
        return self.get_all(status="confirmed")

    def check_availability(self, on_date: date) -> bool:
        """Whether one more confirmed reservation fits on ``on_date``."""
        data = _unwrap(self.api.get_availability(on_date.isoformat()), "Failed to check availability")
        return bool(data["available"])


class DashboardStats:
    """Header numbers for the dashboard."""

    def __init__(self, api: Optional[ApiClient] = None):
        self.api = api or ApiClient()

    def collect(self) -> dict:
        response = self.api.get_stats()
        if not response.success:
            logger.error("Could not load dashboard stats: %s", response.error)
            raise ServiceError(response.error or "Failed to fetch dashboard stats")
        return response.data

"""
HTTP client for the back-office REST API.
"""
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3001/api"


@dataclass
class ApiResponse:
    success: bool
    data: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None


class ApiClient:
    """
    Thin wrapper over the REST endpoints.

    Calls never raise: transport failures, non-2xx answers and bad JSON all
    come back as ``ApiResponse(success=False, error=...)``. Any object with a
    requests-style ``request(method, url, json=..., timeout=...)`` method can
    be passed as ``session``.
    """

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: float = 10.0):
        self.base_url = (base_url or os.environ.get("BACKOFFICE_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def request(self, method: str, endpoint: str, payload: Any = None, params: Optional[dict] = None) -> ApiResponse:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(method, url, json=payload, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return ApiResponse(success=False, error=str(e))

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            error = body.get("error") if isinstance(body, dict) else None
            return ApiResponse(
                success=False,
                error=error or f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        if isinstance(body, dict) and "success" in body:
            if not body["success"]:
                return ApiResponse(success=False, error=body.get("error"), status_code=response.status_code)
            body = body.get("data")
        return ApiResponse(success=True, data=body, status_code=response.status_code)

    # Menu endpoints
    def get_menu_items(self, **params) -> ApiResponse:
        return self.request("GET", "/menu", params=params or None)

    def get_menu_item(self, item_id: int) -> ApiResponse:
        return self.request("GET", f"/menu/{item_id}")

    def create_menu_item(self, item: dict) -> ApiResponse:
        return self.request("POST", "/menu", item)

    def update_menu_item(self, item_id: int, item: dict) -> ApiResponse:
        return self.request("PUT", f"/menu/{item_id}", item)

    def patch_menu_item(self, item_id: int, changes: dict) -> ApiResponse:
        return self.request("PATCH", f"/menu/{item_id}", changes)

    def delete_menu_item(self, item_id: int) -> ApiResponse:
        return self.request("DELETE", f"/menu/{item_id}")

    def update_menu_item_stock(self, item_id: int, stock: int) -> ApiResponse:
        return self.request("PATCH", f"/menu/{item_id}/stock", {"stock": stock})

    # Orders endpoints
    def get_orders(self, **params) -> ApiResponse:
        return self.request("GET", "/orders", params=params or None)

    def get_order(self, order_id: int) -> ApiResponse:
        return self.request("GET", f"/orders/{order_id}")

    def create_order(self, order: dict) -> ApiResponse:
        return self.request("POST", "/orders", order)

    def update_order_status(self, order_id: int, status: str) -> ApiResponse:
        return self.request("PATCH", f"/orders/{order_id}/status", {"status": status})

    # Reservations endpoints
    def get_reservations(self, **params) -> ApiResponse:
        return self.request("GET", "/reservations", params=params or None)

    def get_reservation(self, reservation_id: int) -> ApiResponse:
        return self.request("GET", f"/reservations/{reservation_id}")

    def get_availability(self, on_date: str) -> ApiResponse:
        return self.request("GET", "/reservations/availability", params={"date": on_date})

    def create_reservation(self, reservation: dict) -> ApiResponse:
        return self.request("POST", "/reservations", reservation)

    def update_reservation(self, reservation_id: int, reservation: dict) -> ApiResponse:
        return self.request("PUT", f"/reservations/{reservation_id}", reservation)

    def update_reservation_status(self, reservation_id: int, status: str) -> ApiResponse:
        return self.request("PATCH", f"/reservations/{reservation_id}/status", {"status": status})

    def delete_reservation(self, reservation_id: int) -> ApiResponse:
        return self.request("DELETE", f"/reservations/{reservation_id}")

    # Dashboard
    def get_stats(self) -> ApiResponse:
        return self.request("GET", "/stats")

    def health(self) -> ApiResponse:
        return self.request("GET", "/health")

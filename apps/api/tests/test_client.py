"""
Tests for the dashboard client, run against the app in-process.
"""
from datetime import date
from decimal import Decimal

import pytest
import requests

from backoffice.client import (
    MENU,
    ORDERS,
    ApiClient,
    DashboardStats,
    MenuService,
    OrderCart,
    OrdersService,
    ReservationsService,
    ServiceError,
    get_default_store,
)

TZ = "Europe/Madrid"


class FailingSession:
    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("connection refused")


class BadGatewaySession:
    class Response:
        status_code = 502

        def json(self):
            raise ValueError("no JSON")

    def request(self, method, url, **kwargs):
        return self.Response()


class TestApiClient:

    def test_unwraps_envelope(self, api_client, sample_menu_items):
        response = api_client.get_menu_items()

        assert response.success is True
        assert response.status_code == 200
        assert len(response.data) == 3

    def test_error_from_envelope(self, api_client, db):
        response = api_client.get_order(123)

        assert response.success is False
        assert response.error == "Order not found"
        assert response.status_code == 404

    def test_transport_error_does_not_raise(self):
        client = ApiClient(base_url="http://nowhere/api", session=FailingSession())

        response = client.get_orders()

        assert response.success is False
        assert "connection refused" in response.error

    def test_non_json_error(self):
        client = ApiClient(base_url="http://proxy/api", session=BadGatewaySession())

        response = client.get_menu_items()

        assert response.success is False
        assert response.error == "HTTP 502"


class TestMenuService:

    def test_fetch_once_until_mutation(self, api_client, store, sample_menu_items):
        """The list is fetched once; creating an item makes the next caller fetch again."""
        service = MenuService(api_client, store, tz_name=TZ)

        assert len(service.fetch_if_needed()) == 3
        assert service.fetch_if_needed() is None

        service.create({"name": "Flan", "price": 3.5, "category": "postre", "stock": 5})

        assert len(service.fetch_if_needed()) == 4

    def test_failed_fetch_releases_key(self, store):
        service = MenuService(ApiClient(base_url="http://x/api", session=FailingSession()), store, tz_name=TZ)

        with pytest.raises(ServiceError):
            service.fetch_if_needed()

        assert store.is_fetched(MENU) is False

    def test_filters(self, api_client, store, sample_menu_items):
        service = MenuService(api_client, store, tz_name=TZ)

        assert [i["name"] for i in service.by_category("postre")] == ["Tiramisú"]
        assert {i["name"] for i in service.available()} == {"Paella", "Croquetas"}

    def test_update_stock_and_get(self, api_client, store, sample_menu_items):
        service = MenuService(api_client, store, tz_name=TZ)
        tiramisu = sample_menu_items[1]

        service.update_stock(tiramisu.id, 2)

        assert service.get_by_id(tiramisu.id)["available"] is True
        assert service.get_by_id(999) is None

    def test_delete_missing_raises(self, api_client, store, db):
        service = MenuService(api_client, store, tz_name=TZ)

        with pytest.raises(ServiceError, match="Menu item not found"):
            service.delete(999)


class TestOrderCart:

    def test_total_and_payload(self):
        cart = OrderCart()
        cart.add({"id": 1, "name": "Paella", "price": "12.50"}, 2)
        cart.add({"id": 2, "name": "Croquetas", "price": "7,25"}, 1)

        assert cart.total() == Decimal("32.25")
        payload = cart.to_payload("Ana", customer_phone="600")
        assert payload["total"] == "32.25"
        assert [line["quantity"] for line in payload["items"]] == [2, 1]

    def test_remove(self):
        cart = OrderCart()
        cart.add({"id": 1, "name": "Paella", "price": 12.5})
        cart.add({"id": 2, "name": "Flan", "price": 3})

        cart.remove(0)

        assert cart.total() == Decimal("3.00")

    def test_empty_cart_payload(self):
        with pytest.raises(ValueError):
            OrderCart().to_payload("Ana")

    def test_invalid_quantity(self):
        with pytest.raises(ValueError):
            OrderCart().add({"id": 1, "price": 1}, 0)


class TestOrdersService:

    def test_create_from_cart(self, api_client, store, sample_menu_items):
        """Placing an order invalidates both the orders and the menu lists."""
        service = OrdersService(api_client, store, tz_name=TZ)
        store.should_fetch(ORDERS)
        store.should_fetch(MENU)

        cart = OrderCart()
        cart.add({"id": sample_menu_items[0].id, "name": "Paella", "price": "12.50"}, 2)
        order = service.create(cart, customer_name="Ana")

        assert Decimal(order["total"]) == cart.total()
        assert store.is_fetched(ORDERS) is False
        assert store.is_fetched(MENU) is False

    def test_services_without_store_share_one(self, api_client, sample_menu_items):
        """An order placed through one service makes a separately built menu service refetch."""
        get_default_store().reset()
        menu = MenuService(api_client, tz_name=TZ)
        orders = OrdersService(api_client, tz_name=TZ)

        assert menu.store is orders.store
        assert len(menu.fetch_if_needed()) == 3
        assert menu.fetch_if_needed() is None

        orders.create({"customer_name": "Ana", "items": [{"id": sample_menu_items[0].id, "quantity": 1}]})

        assert menu.fetch_if_needed() is not None
        get_default_store().reset()

    def test_active_and_today(self, api_client, store, sample_menu_items):
        service = OrdersService(api_client, store, tz_name=TZ)
        paella = sample_menu_items[0]
        first = service.create({"customer_name": "Ana", "items": [{"id": paella.id, "quantity": 1}]})
        service.create({"customer_name": "Luis", "items": [{"id": paella.id, "quantity": 1}]})

        service.update_status(first["id"], "delivered")

        assert [o["customer_name"] for o in service.active()] == ["Luis"]
        assert len(service.today()) == 2
        assert len(service.this_month()) == 2
        assert [o["id"] for o in service.by_status("delivered")] == [first["id"]]

    def test_insufficient_stock(self, api_client, store, sample_menu_items):
        service = OrdersService(api_client, store, tz_name=TZ)

        with pytest.raises(ServiceError, match="Insufficient stock"):
            service.create({"customer_name": "Ana", "items": [{"id": sample_menu_items[1].id, "quantity": 1}]})


class TestReservationsService:

    def test_filter_by_local_date(self):
        """A reservation matches the filter when its localized date equals it."""
        reservations = [
            {"id": 1, "date": "2026-03-11"},
            {"id": 2, "date": "2026-03-10T23:30:00Z"},
            {"id": 3, "date": "2026-03-10"},
        ]

        matched = ReservationsService.filter_by_date(reservations, date(2026, 3, 11), TZ)

        assert [r["id"] for r in matched] == [1, 2]

    def test_round_trip_and_availability(self, api_client, store, db):
        service = ReservationsService(api_client, store, tz_name=TZ)
        on_date = date(2026, 12, 24)

        created = service.create({
            "customer_name": "Marta",
            "phone": "611222333",
            "date": on_date.isoformat(),
            "time": "21:00",
            "guests": 5,
        })

        assert [r["id"] for r in service.by_date(on_date)] == [created["id"]]
        assert service.check_availability(on_date) is True
        assert [r["id"] for r in service.confirmed()] == [created["id"]]

        service.update_status(created["id"], "cancelled")
        assert service.confirmed() == []

        assert service.delete(created["id"]) is True
        assert service.get_by_id(created["id"]) is None


class TestDashboardStats:

    def test_collect(self, api_client, sample_menu_items):
        stats = DashboardStats(api_client).collect()

        assert stats["menu_items"] == 3
        assert stats["available_items"] == 2

    def test_failure_is_raised(self):
        stats = DashboardStats(ApiClient(base_url="http://x/api", session=FailingSession()))

        with pytest.raises(ServiceError):
            stats.collect()

"""
Tests for the legacy storage formats handled by the column types.
"""
from decimal import Decimal

from sqlalchemy import text

from backoffice.models import MenuItem, Order


class TestYesNoFlags:

    def test_flags_stored_as_si_no(self, db, sample_menu_items):
        row = db.execute(
            text("SELECT marisco, lactosa FROM menu WHERE nombre = 'Paella'")
        ).one()

        assert tuple(row) == ("si", "no")

    def test_legacy_spellings_read_as_true(self, db):
        """Rows written by older tools may spell yes as "sí" or "Yes"."""
        db.execute(text(
            "INSERT INTO menu (nombre, precio, categoria, stock, vegetariano, gluten, marisco, lactosa, vegano) "
            "VALUES ('Gazpacho', 4.50, 'entrante', 5, 'sí', 'Yes', 'no', 'x', '')"
        ))
        db.commit()

        item = db.query(MenuItem).filter(MenuItem.name == "Gazpacho").one()

        assert item.vegetarian is True
        assert item.gluten is True
        assert item.seafood is False
        assert item.dairy is False
        assert item.vegan is False


class TestOrderColumns:

    def test_comma_total_and_items(self, db):
        db.execute(text(
            "INSERT INTO orders (nombre, direccion, items, total, status, time) "
            "VALUES ('Ana', 'Calle Mayor 1', '[{\"id\": 1, \"name\": \"Paella\", \"price\": \"12,50\", \"quantity\": 1}]', "
            "'12,50', 'pending', '9:05')"
        ))
        db.commit()

        order = db.query(Order).one()

        assert order.total == Decimal("12.50")
        assert order.items[0]["name"] == "Paella"

    def test_unparseable_items_read_as_empty(self, db):
        db.execute(text(
            "INSERT INTO orders (nombre, direccion, items, total, status) "
            "VALUES ('Luis', 'Calle Mayor 2', 'not json', '0', 'pending')"
        ))
        db.commit()

        assert db.query(Order).one().items == []

    def test_total_written_with_dot(self, db):
        db.add(Order(customer_name="Eva", items=[], total=Decimal("7.5"), status="pending"))
        db.commit()

        stored = db.execute(text("SELECT total FROM orders")).scalar_one()

        assert stored == "7.50"

"""
Tests for the shared display and parsing helpers.
"""
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from backoffice.core.formatting import (
    EMPTY_DATE,
    ORDER_STATUS_LABELS,
    category_badge,
    format_date_display,
    format_time_display,
    local_date,
    normalize_time,
    order_datetime,
    parse_amount,
    status_badge,
)

TZ = "Europe/Madrid"


class TestNormalizeTime:

    @pytest.mark.parametrize("value,expected", [
        ("9:05", "09:05"),
        ("16:07", "16:07"),
        ("16:07:33", "16:07"),
        ("2026-01-15T08:05:00", "08:05"),
        (time(7, 3), "07:03"),
        ("24:00", None),
        ("soon", None),
        (None, None),
    ])
    def test_normalize(self, value, expected):
        assert normalize_time(value) == expected

    def test_display_placeholder(self):
        assert format_time_display(None) == "--:--"


class TestParseAmount:

    @pytest.mark.parametrize("value,expected", [
        ("12,50", Decimal("12.50")),
        ("12.5", Decimal("12.50")),
        ("1.234,50", Decimal("1234.50")),
        (7, Decimal("7.00")),
        (9.99, Decimal("9.99")),
        ("", Decimal("0.00")),
        (None, Decimal("0.00")),
        ("abc", Decimal("0.00")),
    ])
    def test_parse(self, value, expected):
        assert parse_amount(value) == expected


class TestDates:

    def test_format_iso_date(self):
        assert format_date_display("2026-03-09") == "09/03/2026"

    def test_format_iso_timestamp(self):
        assert format_date_display("2026-03-09T22:10:00") == "09/03/2026"

    def test_format_invalid(self):
        assert format_date_display("yesterday") == EMPTY_DATE
        assert format_date_display(None) == EMPTY_DATE

    def test_local_date_shifts_utc_timestamps(self):
        """23:30 UTC on 10 March is already 11 March in Madrid."""
        assert local_date("2026-03-10T23:30:00Z", TZ) == date(2026, 3, 11)
        assert local_date(datetime(2026, 3, 10, 23, 30), TZ) == date(2026, 3, 11)

    def test_local_date_keeps_plain_dates(self):
        assert local_date("2026-03-10", TZ) == date(2026, 3, 10)
        assert local_date(date(2026, 3, 10), TZ) == date(2026, 3, 10)

    def test_order_datetime_pads_time(self):
        created = datetime(2026, 7, 1, 10, 0)
        assert order_datetime(created, "9:45", TZ) == "2026-07-01 09:45"

    def test_order_datetime_from_created_at(self):
        # Summer time: UTC+2
        created = datetime(2026, 7, 1, 22, 30)
        assert order_datetime(created, None, TZ) == "2026-07-02 00:30"

    def test_order_datetime_nothing_to_show(self):
        assert order_datetime(None, None, TZ) is None


class TestBadges:

    @pytest.mark.parametrize("category,key,label", [
        ("entrante", "entrantes", "Entrantes"),
        ("  Pescado ", "pescados", "Pescados"),
        ("postre", "postres", "Postres"),
        ("bebida", "default", "Otro"),
        (None, "default", "Otro"),
    ])
    def test_category_badge(self, category, key, label):
        badge_key, badge_label, style = category_badge(category)

        assert (badge_key, badge_label) == (key, label)
        assert style.startswith("bg-")

    def test_status_badge(self):
        assert status_badge("ready", ORDER_STATUS_LABELS) == ("Listo", "bg-green-500")
        assert status_badge("lost", ORDER_STATUS_LABELS) == ("lost", "bg-gray-500")

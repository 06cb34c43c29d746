"""Tests for the date, amount and settings list parsers."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from ledgerbook.domain.entities import Product
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date
from ledgerbook.utils.product_parser import parse_name_list, parse_products

# A Wednesday
TODAY = date(2025, 12, 10)


class TestParseDate:
    """Tests for entry date parsing."""

    def test_absolute_dates(self):
        assert parse_date("2025-12-01") == date(2025, 12, 1)
        assert parse_date("1 December 2025") == date(2025, 12, 1)
        assert parse_date("Dec 1 2025") == date(2025, 12, 1)

    def test_today_and_yesterday(self):
        assert parse_date("today") == date.today()
        assert parse_date(" Yesterday ", today=TODAY) == date(2025, 12, 9)

    def test_days_ago(self):
        assert parse_date("3 days ago", today=TODAY) == date(2025, 12, 7)
        assert parse_date("1 day ago", today=TODAY) == TODAY - timedelta(days=1)

    def test_last_weekday(self):
        assert parse_date("last monday", today=TODAY) == date(2025, 12, 8)
        assert parse_date("last wednesday", today=TODAY) == date(2025, 12, 3)

    def test_months(self):
        assert parse_date("this month", today=TODAY) == date(2025, 12, 1)
        assert parse_date("last month", today=TODAY) == date(2025, 11, 1)
        assert parse_date("last month", today=date(2026, 1, 15)) == date(2025, 12, 1)

    def test_invalid(self):
        with pytest.raises(ValueError, match="Could not parse date"):
            parse_date("not a date")


class TestParseAmount:
    """Tests for amount parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1800", Decimal("1800")),
            ("1,800.50", Decimal("1800.50")),
            ("Rs. 1800", Decimal("1800")),
            ("rs 1,800", Decimal("1800")),
            ("PKR 250.5", Decimal("250.5")),
            ("₨500", Decimal("500")),
        ],
    )
    def test_formats(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_amount(text)


class TestParseProducts:
    """Tests for the product catalog and name list syntax."""

    def test_name_list(self):
        assert parse_name_list("Local Farm A, , Milk Center B ,") == ["Local Farm A", "Milk Center B"]
        assert parse_name_list("") == []

    def test_full_products(self):
        assert parse_products("Milk:180:Liters, Butter:1200:kg") == [
            Product(name="Milk", price=Decimal("180"), unit="Liters"),
            Product(name="Butter", price=Decimal("1200"), unit="kg"),
        ]

    def test_missing_parts_get_defaults(self):
        assert parse_products("Cream, :5:kg, Yogurt:abc") == [
            Product(name="Cream", price=Decimal("0"), unit="Unit"),
            Product(name="Unknown", price=Decimal("5"), unit="kg"),
            Product(name="Yogurt", price=Decimal("0"), unit="Unit"),
        ]

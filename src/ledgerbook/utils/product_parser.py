"""Parsing of the comma-separated settings lists."""

from decimal import Decimal, InvalidOperation

from ledgerbook.domain.entities import Product


def parse_name_list(text: str) -> list[str]:
    """Split "A, B, C" into names, dropping blanks."""
    return [item.strip() for item in text.split(",") if item.strip()]


def parse_products(text: str) -> list[Product]:
    """Parse a product catalog written as "Milk:180:Liters, Butter:1200:kg".

    A missing name becomes "Unknown", a missing or unparsable price becomes 0
    and a missing unit becomes "Unit".
    """
    products = []
    for item in parse_name_list(text):
        parts = [part.strip() for part in item.split(":")]
        name = parts[0] or "Unknown"
        try:
            price = Decimal(parts[1]) if len(parts) > 1 and parts[1] else Decimal("0")
        except InvalidOperation:
            price = Decimal("0")
        if not price.is_finite():
            price = Decimal("0")
        unit = parts[2] if len(parts) > 2 and parts[2] else "Unit"
        products.append(Product(name=name, price=price, unit=unit))
    return products

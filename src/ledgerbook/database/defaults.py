"""First-run data: default settings and the illustrative seed entries."""

from datetime import date, datetime, UTC
from decimal import Decimal

from ledgerbook.domain.entities import Entry, EntryKind, Product, Settings

DEFAULT_SETTINGS = Settings(
    app_name="Daud Dairy Products",
    phone="0300-1234567",
    products=(
        Product(name="Milk", price=Decimal("180"), unit="Liters"),
        Product(name="Butter", price=Decimal("1200"), unit="kg"),
        Product(name="Cream", price=Decimal("800"), unit="kg"),
        Product(name="Yogurt", price=Decimal("250"), unit="kg"),
    ),
    suppliers=("Local Farm A", "Milk Center B"),
)


def seed_sale() -> Entry:
    """Illustrative sale written on first run."""
    return Entry(
        id="1",
        kind=EntryKind.SALE,
        date=date(2025, 12, 1),
        party_name="Alice Smith",
        amount=Decimal("1800"),
        created_at=datetime.now(UTC),
        product="Milk",
        quantity=Decimal("10"),
        unit="Liters",
        unit_price=Decimal("180"),
    )


def seed_purchase() -> Entry:
    """Illustrative purchase written on first run."""
    return Entry(
        id="e1",
        kind=EntryKind.PURCHASE,
        date=date(2025, 12, 2),
        party_name="Local Farm A",
        amount=Decimal("8000"),
        created_at=datetime.now(UTC),
        product="Raw Milk",
        quantity=Decimal("50"),
        unit_price=Decimal("160"),
    )

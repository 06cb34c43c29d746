"""Settings and party list domain service."""

from typing import Iterable, Sequence

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import Product, Settings


def _clean_names(names: Iterable[str]) -> list[str]:
    cleaned: list[str] = []
    for name in names:
        name = name.strip()
        if name and name not in cleaned:
            cleaned.append(name)
    return cleaned


class SettingsService:
    """Service for business settings and registered parties."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_settings(self) -> Settings:
        """Get current settings (defaults if never saved)."""
        return self.db.load_settings()

    def save_settings(
        self,
        app_name: str,
        phone: str,
        products: Sequence[Product],
        suppliers: Sequence[str],
    ) -> Settings:
        """Replace the whole settings document.

        Args:
            app_name: Business name
            phone: Business phone number
            products: Full product catalog
            suppliers: Full supplier list; blanks and exact duplicates are dropped

        Returns:
            The saved settings
        """
        settings = Settings(
            app_name=app_name.strip(),
            phone=phone.strip(),
            products=tuple(products),
            suppliers=tuple(_clean_names(suppliers)),
        )
        self.db.save_settings(settings)
        return settings

    def list_clients(self) -> list[str]:
        """List registered client names."""
        return self.db.load_clients()

    def save_clients(self, names: Iterable[str]) -> list[str]:
        """Replace the client list.

        Removing a name does not touch entries recorded against it.
        """
        cleaned = _clean_names(names)
        self.db.save_clients(cleaned)
        return cleaned

    def list_suppliers(self) -> list[str]:
        """List registered supplier names."""
        return list(self.db.load_settings().suppliers)

"""Abstract database interface."""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain services
from ledgerbook.domain.entities import Collection, Entry, Settings
from ledgerbook.database.defaults import seed_purchase, seed_sale
from ledgerbook.domain.errors import NotFoundError, StorageUnavailable, entry_not_found

logger = logging.getLogger(__name__)


class Database(ABC):
    """Abstract ledger repository.

    Concrete stores provide whole-collection reads and writes. Single-entry
    changes are built on top as read-modify-write of the full collection.
    Reads recover from storage and decode failures with empty or default
    data. Writes, and the loads that feed a read-modify-write, raise
    StorageUnavailable instead, so an unreadable collection is never
    overwritten.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Entry collections
    @abstractmethod
    def load(self, collection: Collection) -> list[Entry]:
        """Load all entries of a collection in stored order."""
        pass

    @abstractmethod
    def load_for_update(self, collection: Collection) -> list[Entry]:
        """Load a collection that is about to be rewritten.

        Raises:
            StorageUnavailable: If the stored collection cannot be read or decoded
        """
        pass

    @abstractmethod
    def save(self, collection: Collection, entries: Sequence[Entry]) -> None:
        """Replace a collection with the given entries."""
        pass

    @abstractmethod
    def has_document(self, key: str) -> bool:
        """Check whether a document has ever been written under key."""
        pass

    # Clients
    @abstractmethod
    def load_clients(self) -> list[str]:
        """Load the registered client names."""
        pass

    @abstractmethod
    def load_clients_for_update(self) -> list[str]:
        """Load the client names that are about to be rewritten.

        Raises:
            StorageUnavailable: If the stored list cannot be read or decoded
        """
        pass

    @abstractmethod
    def save_clients(self, names: Sequence[str]) -> None:
        """Replace the registered client names."""
        pass

    # Settings
    @abstractmethod
    def load_settings(self) -> Settings:
        """Load settings, falling back to defaults."""
        pass

    @abstractmethod
    def save_settings(self, settings: Settings) -> None:
        """Replace the settings document wholesale."""
        pass

    @abstractmethod
    def replace_all(
        self,
        sales: Sequence[Entry],
        expenses: Sequence[Entry],
        clients: Sequence[str],
        settings: Settings,
    ) -> None:
        """Replace all four documents in one transaction."""
        pass

    def find(self, entry_id: str) -> Optional[Entry]:
        """Find an entry by ID in either collection."""
        for collection in Collection:
            for entry in self.load(collection):
                if entry.id == entry_id:
                    return entry
        return None

    def upsert(self, collection: Collection, entry: Entry) -> None:
        """Append a new entry, or replace an existing one in its position."""
        entries = self.load_for_update(collection)
        for index, existing in enumerate(entries):
            if existing.id == entry.id:
                entries[index] = entry
                break
        else:
            entries.append(entry)
        self.save(collection, entries)

    def remove(self, collection: Collection, entry_id: str) -> None:
        """Remove the entry with the given ID from a collection.

        Raises:
            NotFoundError: If no entry with that ID is in the collection
        """
        entries = self.load_for_update(collection)
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            raise NotFoundError(entry_not_found(entry_id))
        self.save(collection, remaining)

    def add_client(self, name: str) -> bool:
        """Register a client name if not already present (exact match).

        Returns:
            True if the name was added
        """
        clients = self.load_clients_for_update()
        if name in clients:
            return False
        clients.append(name)
        self.save_clients(clients)
        return True

    def seed_defaults(self) -> None:
        """Write the illustrative first-run entries for never-written collections."""
        try:
            if not self.has_document(Collection.SALES.value):
                logger.info("Seeding sales collection with a sample entry")
                sale = seed_sale()
                self.save(Collection.SALES, [sale])
                self.save_clients([sale.party_name])
            if not self.has_document(Collection.EXPENSES.value):
                logger.info("Seeding expenses collection with a sample entry")
                self.save(Collection.EXPENSES, [seed_purchase()])
        except StorageUnavailable as e:
            logger.error("Skipping first-run seed: %s", e)

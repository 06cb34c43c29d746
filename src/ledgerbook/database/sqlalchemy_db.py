"""Generic SQLAlchemy database implementation."""

import json
import logging
from typing import Any, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledgerbook.database.base import Database
from ledgerbook.database.defaults import DEFAULT_SETTINGS
from ledgerbook.database.mappers import (
    clients_from_document,
    entries_from_document,
    entry_to_document,
    settings_from_document,
    settings_to_document,
)
from ledgerbook.database.models import SCHEMA_VERSION, Document, create_session_factory
from ledgerbook.domain.entities import Collection, Entry, Settings
from ledgerbook.domain.errors import DecodeError, StorageUnavailable

logger = logging.getLogger(__name__)

CLIENTS_KEY = "clients"
SETTINGS_KEY = "settings"


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface.

    Each collection is one row of the documents table holding a JSON payload.
    """

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    # Raw document access
    def read_document(self, key: str) -> Optional[Any]:
        """Read and parse the JSON payload stored under key.

        Returns:
            Parsed payload, or None if the key was never written

        Raises:
            StorageUnavailable: If the store cannot be read
            DecodeError: If the payload is not valid JSON of the current schema
        """
        session = self._get_session()
        try:
            document = session.get(Document, key, populate_existing=True)
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageUnavailable(f"Could not read '{key}': {e}") from e
        if document is None:
            return None
        if document.schema_version != SCHEMA_VERSION:
            raise DecodeError(
                f"Document '{key}' has unsupported schema version {document.schema_version}"
            )
        try:
            return json.loads(document.payload)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Document '{key}' is not valid JSON: {e}") from e

    def write_documents(self, documents: dict[str, Any]) -> None:
        """Write several documents in a single commit.

        Raises:
            StorageUnavailable: If the write fails; nothing is written
        """
        session = self._get_session()
        try:
            for key, data in documents.items():
                session.merge(
                    Document(
                        key=key,
                        schema_version=SCHEMA_VERSION,
                        payload=json.dumps(data),
                    )
                )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageUnavailable(
                f"Could not write {', '.join(documents)}: {e}"
            ) from e

    def has_document(self, key: str) -> bool:
        """Check whether a document has ever been written under key."""
        session = self._get_session()
        try:
            return session.get(Document, key, populate_existing=True) is not None
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageUnavailable(f"Could not read '{key}': {e}") from e

    def _decode_entries(self, collection: Collection) -> list[Entry]:
        data = self.read_document(collection.value)
        if data is None:
            return []
        return entries_from_document(data, collection.side)

    def _decode_clients(self) -> list[str]:
        data = self.read_document(CLIENTS_KEY)
        if data is None:
            return []
        return clients_from_document(data)

    # Entry collections
    def load(self, collection: Collection) -> list[Entry]:
        """Load all entries of a collection, or an empty list if unreadable."""
        try:
            return self._decode_entries(collection)
        except (StorageUnavailable, DecodeError) as e:
            logger.error("Falling back to empty %s collection: %s", collection.value, e)
            return []

    def load_for_update(self, collection: Collection) -> list[Entry]:
        """Load all entries of a collection, failing if it is unreadable."""
        try:
            return self._decode_entries(collection)
        except DecodeError as e:
            raise StorageUnavailable(
                f"Refusing to rewrite unreadable {collection.value} collection: {e}"
            ) from e

    def save(self, collection: Collection, entries: Sequence[Entry]) -> None:
        """Replace a collection with the given entries."""
        self.write_documents(
            {collection.value: [entry_to_document(e) for e in entries]}
        )

    # Clients
    def load_clients(self) -> list[str]:
        """Load the registered client names, or an empty list if unreadable."""
        try:
            return self._decode_clients()
        except (StorageUnavailable, DecodeError) as e:
            logger.error("Falling back to empty client list: %s", e)
            return []

    def load_clients_for_update(self) -> list[str]:
        """Load the registered client names, failing if they are unreadable."""
        try:
            return self._decode_clients()
        except DecodeError as e:
            raise StorageUnavailable(f"Refusing to rewrite unreadable client list: {e}") from e

    def save_clients(self, names: Sequence[str]) -> None:
        """Replace the registered client names."""
        self.write_documents({CLIENTS_KEY: list(names)})

    # Settings
    def load_settings(self) -> Settings:
        """Load settings, or the default settings if none are stored or readable."""
        try:
            data = self.read_document(SETTINGS_KEY)
            if data is None:
                return DEFAULT_SETTINGS
            return settings_from_document(data)
        except (StorageUnavailable, DecodeError) as e:
            logger.warning("Using default settings: %s", e)
            return DEFAULT_SETTINGS

    def save_settings(self, settings: Settings) -> None:
        """Replace the settings document wholesale."""
        self.write_documents({SETTINGS_KEY: settings_to_document(settings)})

    def replace_all(
        self,
        sales: Sequence[Entry],
        expenses: Sequence[Entry],
        clients: Sequence[str],
        settings: Settings,
    ) -> None:
        """Replace all four documents in one transaction."""
        self.write_documents(
            {
                Collection.SALES.value: [entry_to_document(e) for e in sales],
                Collection.EXPENSES.value: [entry_to_document(e) for e in expenses],
                CLIENTS_KEY: list(clients),
                SETTINGS_KEY: settings_to_document(settings),
            }
        )

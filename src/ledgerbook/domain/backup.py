"""Backup and restore of the whole ledger."""

import json
import logging
from datetime import date, datetime, UTC
from pathlib import Path
from typing import Any, Optional

from ledgerbook.database.base import Database
from ledgerbook.database.mappers import (
    clients_from_document,
    entries_from_document,
    entry_to_document,
    settings_from_document,
    settings_to_document,
)
from ledgerbook.domain.entities import Collection, Entry, Side, Snapshot
from ledgerbook.domain.errors import DecodeError, SnapshotImportError, snapshot_missing_keys

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1
REQUIRED_KEYS = ("sales", "expenses", "clients", "settings")


def backup_filename(day: date) -> str:
    """Return the backup file name for a given export date."""
    return f"Ledger_Backup_{day.isoformat()}.json"


def snapshot_to_document(snapshot: Snapshot) -> dict[str, Any]:
    """Serialize a snapshot to a JSON-ready document."""
    document: dict[str, Any] = {
        "version": SNAPSHOT_VERSION,
        "sales": [entry_to_document(e) for e in snapshot.sales],
        "expenses": [entry_to_document(e) for e in snapshot.expenses],
        "clients": list(snapshot.clients),
        "settings": settings_to_document(snapshot.settings),
    }
    if snapshot.exported_at is not None:
        document["exportedAt"] = snapshot.exported_at.isoformat()
    return document


def _decode_side(data: Any, key: str, side: Side) -> tuple[Entry, ...]:
    entries = entries_from_document(data, side)
    for entry in entries:
        if entry.side is not side:
            raise SnapshotImportError(
                f"Entry {entry.id} ({entry.kind.value}) does not belong in '{key}'"
            )
    return tuple(entries)


def snapshot_from_document(doc: Any) -> Snapshot:
    """Validate and decode a backup document.

    Raises:
        SnapshotImportError: If the document is not a complete, valid snapshot
    """
    if not isinstance(doc, dict):
        raise SnapshotImportError("Backup must be a JSON object")

    missing = [key for key in REQUIRED_KEYS if key not in doc]
    if missing:
        raise SnapshotImportError(snapshot_missing_keys(missing))

    for key in ("sales", "expenses", "clients"):
        if not isinstance(doc[key], list):
            raise SnapshotImportError(f"Backup section '{key}' must be a list")
    if not isinstance(doc["settings"], dict):
        raise SnapshotImportError("Backup section 'settings' must be an object")

    version = doc.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise SnapshotImportError(f"Unsupported backup version: {version!r}")

    try:
        return Snapshot(
            sales=_decode_side(doc["sales"], "sales", Side.CLIENT),
            expenses=_decode_side(doc["expenses"], "expenses", Side.SUPPLIER),
            clients=tuple(clients_from_document(doc["clients"])),
            settings=settings_from_document(doc["settings"]),
        )
    except DecodeError as e:
        raise SnapshotImportError(f"Invalid backup: {e}") from e


class BackupService:
    """Service exporting and restoring full ledger snapshots."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db

    def export_snapshot(self) -> Snapshot:
        """Capture all four collections."""
        return Snapshot(
            sales=tuple(self.db.load(Collection.SALES)),
            expenses=tuple(self.db.load(Collection.EXPENSES)),
            clients=tuple(self.db.load_clients()),
            settings=self.db.load_settings(),
            exported_at=datetime.now(UTC),
        )

    def import_snapshot(self, doc: Any) -> Snapshot:
        """Replace all collections with the contents of a backup document.

        Either every collection is replaced or none is.

        Args:
            doc: Parsed backup document

        Returns:
            The applied snapshot

        Raises:
            SnapshotImportError: If the document is invalid; nothing is changed
            StorageUnavailable: If the write fails; nothing is changed
        """
        snapshot = snapshot_from_document(doc)
        self.db.replace_all(
            sales=snapshot.sales,
            expenses=snapshot.expenses,
            clients=snapshot.clients,
            settings=snapshot.settings,
        )
        logger.info(
            "Restored %d sales, %d expense entries and %d clients",
            len(snapshot.sales),
            len(snapshot.expenses),
            len(snapshot.clients),
        )
        return snapshot

    def write_backup(self, directory: Path, day: Optional[date] = None) -> Path:
        """Write a backup file into directory and return its path."""
        snapshot = self.export_snapshot()
        path = Path(directory) / backup_filename(day or date.today())
        path.write_text(json.dumps(snapshot_to_document(snapshot), indent=2), encoding="utf-8")
        logger.info("Wrote backup to %s", path)
        return path

    def read_backup(self, path: Path) -> Any:
        """Read a backup file without applying it.

        Raises:
            SnapshotImportError: If the file cannot be read or is not JSON
        """
        try:
            return json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SnapshotImportError(f"Could not read backup '{path}': {e}") from e

    def restore_backup(self, path: Path) -> Snapshot:
        """Read a backup file and apply it."""
        return self.import_snapshot(self.read_backup(path))

"""Shared pytest fixtures for ledgerbook tests."""

import tempfile
import os
from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.backup import BackupService
from ledgerbook.domain.balance import BalanceService
from ledgerbook.domain.entities import Entry, EntryKind
from ledgerbook.domain.entry import EntryService
from ledgerbook.domain.report import ReportService
from ledgerbook.domain.settings import SettingsService


@pytest.fixture
def temp_db():
    """Create a temporary, unseeded database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def entry_service(temp_db):
    """Create an EntryService with a temporary database."""
    return EntryService(temp_db)


@pytest.fixture
def balance_service(temp_db):
    """Create a BalanceService with a temporary database."""
    return BalanceService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def backup_service(temp_db):
    """Create a BackupService with a temporary database."""
    return BackupService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def make_entry():
    """Factory for entries with sensible defaults."""
    counter = {"n": 0}

    def _make(kind, party, amount, on=date(2025, 12, 1), **fields):
        counter["n"] += 1
        kind = EntryKind(kind)
        if not kind.is_payment:
            fields.setdefault("product", "Milk")
        return Entry(
            id=fields.pop("id", f"t{counter['n']}"),
            kind=kind,
            date=on,
            party_name=party,
            amount=Decimal(str(amount)),
            created_at=fields.pop("created_at", datetime(2025, 12, 1, 8, counter["n"], tzinfo=UTC)),
            **fields,
        )

    return _make


@pytest.fixture
def populated_ledger(entry_service, temp_db):
    """Record a small ledger through the service layer."""
    entry_service.record_entry(
        EntryKind.SALE, date=date(2025, 12, 1), party_name="Alice", product="Milk",
        quantity=10, unit="Liters", unit_price=180, amount=1800,
    )
    entry_service.record_entry(
        EntryKind.PAYMENT_IN, date=date(2025, 12, 5), party_name="Alice", amount=800,
    )
    entry_service.record_entry(
        EntryKind.PURCHASE, date=date(2025, 12, 2), party_name="Farm A", product="Raw Milk",
        quantity=50, unit_price=160, amount=8000,
    )
    entry_service.record_entry(
        EntryKind.PAYMENT_OUT, date=date(2025, 12, 6), party_name="Farm A", amount=8000,
    )
    return temp_db


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

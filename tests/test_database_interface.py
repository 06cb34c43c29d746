"""Tests for the SQLAlchemy ledger repository."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerbook.database.defaults import DEFAULT_SETTINGS
from ledgerbook.database.models import Document
from ledgerbook.domain.entities import Collection, EntryKind, Product, Settings
from ledgerbook.domain.errors import NotFoundError, StorageUnavailable


def _write_raw(db, key, payload, schema_version=1):
    session = db._get_session()
    session.merge(Document(key=key, schema_version=schema_version, payload=payload))
    session.commit()


class TestCollections:
    """Tests for collection load/save/upsert/remove."""

    def test_empty_collections(self, temp_db):
        assert temp_db.load(Collection.SALES) == []
        assert temp_db.load(Collection.EXPENSES) == []
        assert temp_db.load_clients() == []

    def test_save_and_load_round_trip(self, temp_db, make_entry):
        entries = [
            make_entry(EntryKind.SALE, "Alice", "1800.50", quantity=Decimal("10"), unit="Liters"),
            make_entry(EntryKind.PAYMENT_IN, "Alice", 800),
        ]
        temp_db.save(Collection.SALES, entries)
        assert temp_db.load(Collection.SALES) == entries

    def test_upsert_appends_new(self, temp_db, make_entry):
        first = make_entry(EntryKind.SALE, "Alice", 1)
        second = make_entry(EntryKind.SALE, "Bob", 2)
        temp_db.upsert(Collection.SALES, first)
        temp_db.upsert(Collection.SALES, second)
        assert temp_db.load(Collection.SALES) == [first, second]

    def test_upsert_replaces_in_place(self, temp_db, make_entry):
        entries = [make_entry(EntryKind.SALE, n, 1) for n in ("A", "B", "C")]
        temp_db.save(Collection.SALES, entries)
        replacement = make_entry(EntryKind.SALE, "B2", 5, id=entries[1].id)
        temp_db.upsert(Collection.SALES, replacement)
        assert temp_db.load(Collection.SALES) == [entries[0], replacement, entries[2]]

    def test_remove(self, temp_db, make_entry):
        entries = [make_entry(EntryKind.PURCHASE, n, 1) for n in ("A", "B", "C")]
        temp_db.save(Collection.EXPENSES, entries)
        temp_db.remove(Collection.EXPENSES, entries[1].id)
        assert temp_db.load(Collection.EXPENSES) == [entries[0], entries[2]]

    def test_remove_unknown_id(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.remove(Collection.SALES, "nope")

    def test_find_across_collections(self, temp_db, make_entry):
        purchase = make_entry(EntryKind.PURCHASE, "Farm", 1, id="e1")
        temp_db.save(Collection.EXPENSES, [purchase])
        assert temp_db.find("e1") == purchase
        assert temp_db.find("e2") is None

    def test_add_client_exact_match(self, temp_db):
        assert temp_db.add_client("Alice") is True
        assert temp_db.add_client("Alice") is False
        assert temp_db.add_client("ALICE") is True
        assert temp_db.load_clients() == ["Alice", "ALICE"]


class TestRecovery:
    """Reads fall back to safe defaults on corrupt documents."""

    def test_corrupt_json_collection(self, temp_db, caplog):
        _write_raw(temp_db, "sales", "{not json")
        assert temp_db.load(Collection.SALES) == []
        assert "Falling back to empty sales collection" in caplog.text

    def test_non_list_collection(self, temp_db):
        _write_raw(temp_db, "expenses", '{"a": 1}')
        assert temp_db.load(Collection.EXPENSES) == []

    def test_bad_entry_in_collection(self, temp_db):
        _write_raw(temp_db, "sales", '[{"id": "1", "kind": "refund"}]')
        assert temp_db.load(Collection.SALES) == []

    def test_unknown_schema_version(self, temp_db):
        _write_raw(temp_db, "clients", '["Alice"]', schema_version=99)
        assert temp_db.load_clients() == []

    def test_corrupt_clients(self, temp_db):
        _write_raw(temp_db, "clients", '[1, 2]')
        assert temp_db.load_clients() == []

    def test_settings_default_when_missing(self, temp_db):
        assert temp_db.load_settings() == DEFAULT_SETTINGS

    def test_settings_default_when_corrupt(self, temp_db):
        _write_raw(temp_db, "settings", "[]")
        assert temp_db.load_settings() == DEFAULT_SETTINGS

    def test_legacy_collection_is_readable(self, temp_db):
        _write_raw(
            temp_db,
            "sales",
            '[{"id": "1", "date": "2025-12-01", "client": "Alice Smith", "product": "Milk",'
            ' "quantity": "10", "unit": "Liters", "price": "180", "amount": "1800",'
            ' "type": "sale", "timestamp": 1764576000000}]',
        )
        [entry] = temp_db.load(Collection.SALES)
        assert entry.kind is EntryKind.SALE
        assert entry.unit_price == Decimal("180")


class TestSettings:
    """Tests for settings persistence."""

    def test_save_replaces_wholesale(self, temp_db):
        settings = Settings(
            app_name="Corner Shop",
            phone="042-111",
            products=(Product(name="Eggs", price=Decimal("12.5"), unit="dozen"),),
            suppliers=(),
        )
        temp_db.save_settings(settings)
        assert temp_db.load_settings() == settings


class TestSeed:
    """Tests for the first-run bootstrap."""

    def test_seed_on_first_run(self, temp_db):
        temp_db.seed_defaults()
        [sale] = temp_db.load(Collection.SALES)
        [purchase] = temp_db.load(Collection.EXPENSES)
        assert sale.kind is EntryKind.SALE
        assert sale.party_name == "Alice Smith"
        assert sale.amount == Decimal("1800")
        assert sale.date == date(2025, 12, 1)
        assert purchase.kind is EntryKind.PURCHASE
        assert purchase.party_name == "Local Farm A"
        assert purchase.amount == Decimal("8000")
        assert temp_db.load_clients() == ["Alice Smith"]

    def test_seed_runs_once(self, temp_db):
        temp_db.seed_defaults()
        temp_db.remove(Collection.SALES, "1")
        temp_db.seed_defaults()
        assert temp_db.load(Collection.SALES) == []
        assert len(temp_db.load(Collection.EXPENSES)) == 1

    def test_seed_skips_written_collections(self, temp_db, make_entry):
        temp_db.save(Collection.SALES, [])
        temp_db.seed_defaults()
        assert temp_db.load(Collection.SALES) == []
        assert len(temp_db.load(Collection.EXPENSES)) == 1

    def test_seed_survives_storage_failure(self, temp_db, monkeypatch):
        def unavailable(key):
            raise StorageUnavailable("disk gone")

        monkeypatch.setattr(temp_db, "has_document", unavailable)
        temp_db.seed_defaults()


def test_write_failure_raises_storage_unavailable(temp_db, make_entry, monkeypatch):
    from sqlalchemy.exc import OperationalError

    session = temp_db._get_session()

    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "commit", failing_commit)
    with pytest.raises(StorageUnavailable):
        temp_db.save(Collection.SALES, [make_entry(EntryKind.SALE, "A", 1)])


class TestReadModifyWrite:
    """Single-entry changes never rewrite a collection they could not read."""

    VALID = (
        '{"id": "g1", "kind": "sale", "party": "Alice", "product": "Milk",'
        ' "date": "2025-12-01", "amount": "1800", "created_at": "2025-12-01T08:00:00+00:00"}'
    )
    BROKEN = '{"id": "b1", "kind": "sale", "party": "Alice", "product": "Milk", "date": "2025-12-01", "amount": "abc"}'

    def _corrupt_sales(self, db):
        payload = f"[{self.VALID}, {self.BROKEN}]"
        _write_raw(db, "sales", payload)
        return payload

    def _stored_payload(self, db, key):
        return db._get_session().get(Document, key, populate_existing=True).payload

    def test_upsert_refuses_unreadable_collection(self, temp_db, make_entry):
        payload = self._corrupt_sales(temp_db)
        with pytest.raises(StorageUnavailable, match="unreadable sales"):
            temp_db.upsert(Collection.SALES, make_entry(EntryKind.PAYMENT_IN, "Alice", 100))
        assert self._stored_payload(temp_db, "sales") == payload

    def test_remove_refuses_unreadable_collection(self, temp_db):
        payload = self._corrupt_sales(temp_db)
        with pytest.raises(StorageUnavailable):
            temp_db.remove(Collection.SALES, "g1")
        assert self._stored_payload(temp_db, "sales") == payload

    def test_add_client_refuses_unreadable_list(self, temp_db):
        _write_raw(temp_db, "clients", '["Alice", 7]')
        with pytest.raises(StorageUnavailable, match="client list"):
            temp_db.add_client("Bob")
        assert self._stored_payload(temp_db, "clients") == '["Alice", 7]'

    def test_reads_still_fall_back(self, temp_db):
        self._corrupt_sales(temp_db)
        assert temp_db.load(Collection.SALES) == []
        assert temp_db.find("g1") is None

    def test_missing_collection_is_writable(self, temp_db, make_entry):
        entry = make_entry(EntryKind.SALE, "Alice", 1)
        temp_db.upsert(Collection.SALES, entry)
        assert temp_db.load_for_update(Collection.SALES) == [entry]

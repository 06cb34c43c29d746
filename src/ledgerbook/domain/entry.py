"""Entry model validation and entry domain service."""

import logging
import uuid
from datetime import date, datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.balance import listing_order, matches_party
from ledgerbook.domain.entities import Collection, Entry, EntryKind, Side
from ledgerbook.domain.errors import (
    NotFoundError,
    ValidationError,
    entry_not_found,
    missing_field,
    not_positive,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"date", "party_name", "product", "quantity", "unit", "unit_price", "amount"}
)


def _to_decimal(field: str, value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(not_positive(field, value))
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(not_positive(field, value))
    if not number.is_finite() or number <= 0:
        raise ValidationError(not_positive(field, value))
    return number


def _optional_decimal(field: str, value: Any) -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return _to_decimal(field, value)


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Invalid date '{value}'")


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def suggest_amount(
    quantity: Optional[Decimal], unit_price: Optional[Decimal]
) -> Optional[Decimal]:
    """Return quantity x unit price rounded to cents, or None if not computable."""
    if quantity is None or unit_price is None:
        return None
    total = (Decimal(quantity) * Decimal(unit_price)).quantize(Decimal("0.01"))
    return total if total > 0 else None


def create_entry(
    kind: EntryKind,
    *,
    date: Any,
    party_name: Optional[str],
    amount: Any,
    product: Optional[str] = None,
    quantity: Any = None,
    unit: Optional[str] = None,
    unit_price: Any = None,
    entry_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Entry:
    """Build a validated entry.

    The amount is taken as given; it is never recomputed from quantity and
    unit price. A mismatch is logged but accepted.

    Raises:
        ValidationError: If any field fails validation
    """
    kind = EntryKind(kind)
    entry_date = _to_date(date)

    party = _clean_text(party_name)
    if party is None:
        label = "Client" if kind.side is Side.CLIENT else "Supplier"
        raise ValidationError(missing_field(label))

    entry_amount = _to_decimal("Amount", amount)

    if kind.is_payment:
        product = quantity = unit = unit_price = None
    else:
        product = _clean_text(product)
        if product is None:
            raise ValidationError(missing_field("Product"))
        quantity = _optional_decimal("Quantity", quantity)
        unit_price = _optional_decimal("Unit price", unit_price)
        unit = _clean_text(unit)

        expected = suggest_amount(quantity, unit_price)
        if expected is not None and expected != entry_amount:
            logger.warning(
                "Amount %s differs from quantity x price %s for %s entry of %s",
                entry_amount,
                expected,
                kind.value,
                party,
            )

    return Entry(
        id=entry_id or uuid.uuid4().hex,
        kind=kind,
        date=entry_date,
        party_name=party,
        amount=entry_amount,
        created_at=created_at or datetime.now(UTC),
        product=product,
        quantity=quantity,
        unit=unit,
        unit_price=unit_price,
    )


def update_entry(existing: Entry, **patch: Any) -> Entry:
    """Return a copy of an entry with mutable fields replaced.

    The id, kind and creation time are kept. Fields not in the patch keep
    their current values; passing None clears an optional field.

    Raises:
        ValidationError: If the patch names an immutable field or the result is invalid
    """
    unknown = set(patch) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Cannot change {', '.join(sorted(unknown))} of an existing entry")

    fields = {
        "date": existing.date,
        "party_name": existing.party_name,
        "product": existing.product,
        "quantity": existing.quantity,
        "unit": existing.unit,
        "unit_price": existing.unit_price,
        "amount": existing.amount,
    }
    fields.update(patch)
    return create_entry(
        existing.kind,
        entry_id=existing.id,
        created_at=existing.created_at,
        **fields,
    )


class EntryService:
    """Service for recording and maintaining ledger entries."""

    def __init__(self, db: Database):
        """Initialize entry service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_entry(self, kind: EntryKind, **fields: Any) -> Entry:
        """Validate and store a new entry.

        Client names not yet registered are added to the client list.

        Args:
            kind: Entry kind
            **fields: Entry fields accepted by create_entry

        Returns:
            The stored entry

        Raises:
            ValidationError: If the entry is invalid; nothing is stored
        """
        entry = create_entry(kind, **fields)
        if entry.side is Side.CLIENT:
            self.db.add_client(entry.party_name)
        self.db.upsert(entry.collection, entry)
        logger.debug("Recorded %s entry %s for %s", entry.kind.value, entry.id, entry.party_name)
        return entry

    def get_entry(self, entry_id: str) -> Optional[Entry]:
        """Get entry by ID from either collection."""
        return self.db.find(entry_id)

    def require_entry(self, entry_id: str) -> Entry:
        """Get entry by ID or raise NotFoundError."""
        entry = self.db.find(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def edit_entry(self, entry_id: str, **patch: Any) -> Entry:
        """Replace mutable fields of an entry in place.

        Raises:
            NotFoundError: If the entry doesn't exist
            ValidationError: If the edited entry is invalid
        """
        existing = self.require_entry(entry_id)
        updated = update_entry(existing, **patch)
        if updated.side is Side.CLIENT and updated.party_name != existing.party_name:
            self.db.add_client(updated.party_name)
        self.db.upsert(updated.collection, updated)
        return updated

    def delete_entry(self, entry_id: str) -> Entry:
        """Delete an entry and return what was removed.

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        existing = self.require_entry(entry_id)
        self.db.remove(existing.collection, entry_id)
        return existing

    def list_entries(
        self,
        collection: Optional[Collection] = None,
        search: Optional[str] = None,
    ) -> list[Entry]:
        """List entries newest first.

        Args:
            collection: Restrict to one collection, or None for both
            search: Case-insensitive substring filter on party name
        """
        collections = [collection] if collection is not None else list(Collection)
        entries: list[Entry] = []
        for name in collections:
            entries.extend(self.db.load(name))
        if search:
            entries = [e for e in entries if matches_party(e, search)]
        return listing_order(entries)

    def recent_entries(self, limit: int = 10) -> list[Entry]:
        """Return the most recent entries across both collections."""
        return self.list_entries()[:limit]

"""Mapper functions between domain entities and stored JSON documents.

Decoding is explicit: a document that does not fit the schema raises
DecodeError naming the offending field, and callers choose the fallback.
Entry documents written by the original browser ledger (``type`` plus
``client``/``supplier`` presence) are still accepted.
"""

from datetime import date, datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ledgerbook.domain.entities import Entry, EntryKind, Product, Settings, Side
from ledgerbook.domain.errors import DecodeError

LEGACY_PAYMENT_PRODUCT = "Payment"
UNKNOWN_PARTY = "N/A"


def _decimal_to_str(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def _require(doc: dict, field: str) -> Any:
    value = doc.get(field)
    if value is None or value == "":
        raise DecodeError(f"Missing '{field}' in entry {doc.get('id', '?')}")
    return value


def _decode_decimal(value: Any, field: str, required: bool = False) -> Optional[Decimal]:
    if value is None or value == "":
        if required:
            raise DecodeError(f"Missing '{field}'")
        return None
    if isinstance(value, bool):
        raise DecodeError(f"Invalid number for '{field}': {value!r}")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise DecodeError(f"Invalid number for '{field}': {value!r}")
    if not number.is_finite():
        raise DecodeError(f"Invalid number for '{field}': {value!r}")
    return number


def _decode_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def _decode_date(value: Any) -> date:
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise DecodeError(f"Invalid date: {value!r}")


def _decode_created_at(doc: dict) -> datetime:
    if doc.get("created_at"):
        try:
            created = datetime.fromisoformat(str(doc["created_at"]))
        except ValueError:
            raise DecodeError(f"Invalid created_at: {doc['created_at']!r}")
        return created if created.tzinfo else created.replace(tzinfo=UTC)
    timestamp = doc.get("timestamp")
    if timestamp in (None, ""):
        return datetime.fromtimestamp(0, UTC)
    try:
        return datetime.fromtimestamp(float(timestamp) / 1000, UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        raise DecodeError(f"Invalid timestamp: {timestamp!r}")


def _legacy_kind(doc: dict, side: Optional[Side]) -> tuple[EntryKind, str]:
    is_payment = doc.get("type") == "payment"
    if doc.get("client"):
        kind = EntryKind.PAYMENT_IN if is_payment else EntryKind.SALE
        return kind, str(doc["client"])
    if doc.get("supplier"):
        kind = EntryKind.PAYMENT_OUT if is_payment else EntryKind.PURCHASE
        return kind, str(doc["supplier"])
    if side is not None:
        kind = EntryKind.payment_for(side) if is_payment else EntryKind.transaction_for(side)
        return kind, UNKNOWN_PARTY
    raise DecodeError(f"Entry {doc.get('id', '?')} has neither client nor supplier")


def entry_to_document(entry: Entry) -> dict[str, Any]:
    """Convert a domain Entry to its stored document."""
    return {
        "id": entry.id,
        "kind": entry.kind.value,
        "date": entry.date.isoformat(),
        "party": entry.party_name,
        "product": entry.product,
        "quantity": _decimal_to_str(entry.quantity),
        "unit": entry.unit,
        "unit_price": _decimal_to_str(entry.unit_price),
        "amount": str(entry.amount),
        "created_at": entry.created_at.isoformat(),
    }


def entry_from_document(doc: Any, side: Optional[Side] = None) -> Entry:
    """Convert a stored document (current or legacy layout) to a domain Entry.

    A legacy entry naming neither a client nor a supplier is recorded against
    UNKNOWN_PARTY on the given side, if one is given.

    Raises:
        DecodeError: If the document does not describe a valid entry
    """
    if not isinstance(doc, dict):
        raise DecodeError(f"Entry must be an object, got {type(doc).__name__}")

    if "kind" in doc:
        try:
            kind = EntryKind(doc["kind"])
        except ValueError:
            raise DecodeError(f"Unknown entry kind: {doc['kind']!r}")
        party = str(_require(doc, "party"))
        unit_price = doc.get("unit_price")
    else:
        kind, party = _legacy_kind(doc, side)
        unit_price = doc.get("price")

    product = _decode_text(doc.get("product"))
    quantity = _decode_decimal(doc.get("quantity"), "quantity")
    unit = _decode_text(doc.get("unit"))
    price = _decode_decimal(unit_price, "unit_price")
    if kind.is_payment:
        if product == LEGACY_PAYMENT_PRODUCT:
            product = None
        quantity = unit = price = None

    return Entry(
        id=str(_require(doc, "id")),
        kind=kind,
        date=_decode_date(_require(doc, "date")),
        party_name=party,
        amount=_decode_decimal(doc.get("amount"), "amount", required=True),
        created_at=_decode_created_at(doc),
        product=product,
        quantity=quantity,
        unit=unit,
        unit_price=price,
    )


def entries_from_document(data: Any, side: Optional[Side] = None) -> list[Entry]:
    """Decode a stored collection of entries, all belonging to side."""
    if not isinstance(data, list):
        raise DecodeError(f"Entry collection must be a list, got {type(data).__name__}")
    return [entry_from_document(item, side) for item in data]


def clients_from_document(data: Any) -> list[str]:
    """Decode the stored client name list."""
    if not isinstance(data, list) or not all(isinstance(name, str) for name in data):
        raise DecodeError("Client list must be a list of names")
    return list(data)


def settings_to_document(settings: Settings) -> dict[str, Any]:
    """Convert domain Settings to its stored document."""
    return {
        "appName": settings.app_name,
        "phone": settings.phone,
        "products": [
            {"name": p.name, "price": str(p.price), "unit": p.unit}
            for p in settings.products
        ],
        "suppliers": list(settings.suppliers),
    }


def settings_from_document(doc: Any) -> Settings:
    """Convert a stored settings document to domain Settings.

    Raises:
        DecodeError: If the document does not describe valid settings
    """
    if not isinstance(doc, dict):
        raise DecodeError("Settings must be an object")
    products = doc.get("products", [])
    suppliers = doc.get("suppliers", [])
    if not isinstance(products, list):
        raise DecodeError("Settings 'products' must be a list")
    if not isinstance(suppliers, list) or not all(isinstance(s, str) for s in suppliers):
        raise DecodeError("Settings 'suppliers' must be a list of names")

    decoded = []
    for item in products:
        if not isinstance(item, dict) or not item.get("name"):
            raise DecodeError(f"Invalid product: {item!r}")
        decoded.append(
            Product(
                name=str(item["name"]),
                price=_decode_decimal(item.get("price"), "price") or Decimal("0"),
                unit=str(item.get("unit") or "Unit"),
            )
        )

    return Settings(
        app_name=str(doc.get("appName", "")),
        phone=str(doc.get("phone", "")),
        products=tuple(decoded),
        suppliers=tuple(suppliers),
    )

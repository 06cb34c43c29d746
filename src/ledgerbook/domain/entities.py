"""Domain model entities for ledgerbook.

These are pure data classes representing business concepts, independent of
the stored document layout. Money and quantities are Decimal throughout.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class Side(str, Enum):
    """Which kind of party an entry is recorded against."""

    CLIENT = "client"
    SUPPLIER = "supplier"

    @property
    def collection(self) -> "Collection":
        if self is Side.CLIENT:
            return Collection.SALES
        return Collection.EXPENSES


class Collection(str, Enum):
    """Persisted entry collections. Values are the store keys."""

    SALES = "sales"
    EXPENSES = "expenses"

    @property
    def side(self) -> Side:
        return Side.CLIENT if self is Collection.SALES else Side.SUPPLIER


class EntryKind(str, Enum):
    """Closed set of entry kinds.

    Sales and client payments live in the sales collection; purchases and
    supplier payments live in the expenses collection.
    """

    SALE = "sale"
    PURCHASE = "purchase"
    PAYMENT_IN = "payment_in"
    PAYMENT_OUT = "payment_out"

    @property
    def side(self) -> Side:
        if self in (EntryKind.SALE, EntryKind.PAYMENT_IN):
            return Side.CLIENT
        return Side.SUPPLIER

    @property
    def collection(self) -> "Collection":
        return self.side.collection

    @property
    def is_payment(self) -> bool:
        return self in (EntryKind.PAYMENT_IN, EntryKind.PAYMENT_OUT)

    @classmethod
    def transaction_for(cls, side: Side) -> "EntryKind":
        """Return the volume-bearing kind for a side."""
        return cls.SALE if side is Side.CLIENT else cls.PURCHASE

    @classmethod
    def payment_for(cls, side: Side) -> "EntryKind":
        """Return the settlement kind for a side."""
        return cls.PAYMENT_IN if side is Side.CLIENT else cls.PAYMENT_OUT


@dataclass(frozen=True)
class Entry:
    """A single recorded transaction: sale, purchase, or payment."""

    id: str
    kind: EntryKind
    date: date
    party_name: str
    amount: Decimal
    created_at: datetime
    product: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    unit_price: Optional[Decimal] = None

    @property
    def side(self) -> Side:
        return self.kind.side

    @property
    def collection(self) -> Collection:
        return self.kind.collection


@dataclass(frozen=True)
class Product:
    """Catalog product with its default price."""

    name: str
    price: Decimal
    unit: str


@dataclass(frozen=True)
class Settings:
    """Business settings document."""

    app_name: str
    phone: str
    products: tuple[Product, ...] = ()
    suppliers: tuple[str, ...] = ()

    def find_product(self, name: str) -> Optional[Product]:
        """Look up a catalog product by exact name."""
        for product in self.products:
            if product.name == name:
                return product
        return None


@dataclass(frozen=True)
class AggregateTotals:
    """Volume totals across both collections. Payments are never included."""

    total_sales: Decimal
    total_purchases: Decimal

    @property
    def net_position(self) -> Decimal:
        return self.total_sales - self.total_purchases


@dataclass(frozen=True)
class PartyAccount:
    """Balance row for one registered client or supplier."""

    name: str
    side: Side
    total_transacted: Decimal
    total_settled: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_transacted - self.total_settled


@dataclass(frozen=True)
class MonthlyBucket:
    """One month of activity in the monthly report."""

    month_key: str
    label: str
    sales_volume: Decimal
    purchase_volume: Decimal
    entries: tuple[Entry, ...] = ()

    @property
    def net(self) -> Decimal:
        return self.sales_volume - self.purchase_volume


@dataclass(frozen=True)
class StatementLine:
    """Statement row with the balance after applying the entry."""

    entry: Entry
    balance: Decimal


@dataclass(frozen=True)
class AccountStatement:
    """Chronological account history for a single party."""

    party_name: str
    side: Side
    entries: tuple[Entry, ...]
    total_transacted: Decimal
    total_settled: Decimal

    @property
    def remaining_balance(self) -> Decimal:
        return self.total_transacted - self.total_settled

    @property
    def lines(self) -> tuple[StatementLine, ...]:
        running = Decimal("0")
        lines = []
        for entry in self.entries:
            if entry.kind.is_payment:
                running -= entry.amount
            else:
                running += entry.amount
            lines.append(StatementLine(entry=entry, balance=running))
        return tuple(lines)


@dataclass(frozen=True)
class Receipt:
    """Printable receipt or voucher data for one entry."""

    title: str
    number: str
    business_name: str
    phone: str
    party_label: str
    party_name: str
    date: date
    amount: Decimal
    product: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    unit_price: Optional[Decimal] = None


@dataclass(frozen=True)
class Snapshot:
    """Full export of all persisted collections."""

    sales: tuple[Entry, ...]
    expenses: tuple[Entry, ...]
    clients: tuple[str, ...]
    settings: Settings
    exported_at: Optional[datetime] = field(default=None, compare=False)

"""Monthly reports, account statements and receipts."""

from typing import Iterable, Sequence

from ledgerbook.database.base import Database
from ledgerbook.domain.balance import (
    chronological_order,
    listing_order,
    party_entries,
    sum_amounts,
)
from ledgerbook.domain.entities import (
    AccountStatement,
    Collection,
    Entry,
    EntryKind,
    MonthlyBucket,
    Receipt,
    Settings,
    Side,
)

RECEIPT_TITLES = {
    EntryKind.SALE: "Sales Receipt",
    EntryKind.PURCHASE: "Purchase Voucher",
    EntryKind.PAYMENT_IN: "Payment Voucher",
    EntryKind.PAYMENT_OUT: "Payment Voucher",
}


def month_key(entry: Entry) -> str:
    """Return the YYYY-MM bucket key for an entry."""
    return f"{entry.date.year:04d}-{entry.date.month:02d}"


def monthly_report(sales: Sequence[Entry], expenses: Sequence[Entry]) -> list[MonthlyBucket]:
    """Group entries by calendar month, most recent month first.

    Volumes count sales and purchases only. Payments are listed in their
    month's entries but never change either volume.
    """
    grouped: dict[str, list[Entry]] = {}
    for entry in [*sales, *expenses]:
        grouped.setdefault(month_key(entry), []).append(entry)

    buckets = []
    for key in sorted(grouped, reverse=True):
        entries = listing_order(grouped[key])
        buckets.append(
            MonthlyBucket(
                month_key=key,
                label=entries[0].date.strftime("%B %Y"),
                sales_volume=sum_amounts(entries, EntryKind.SALE),
                purchase_volume=sum_amounts(entries, EntryKind.PURCHASE),
                entries=tuple(entries),
            )
        )
    return buckets


def account_statement(entries: Iterable[Entry], party_name: str, side: Side) -> AccountStatement:
    """Build a party's statement with entries oldest first."""
    own = chronological_order(party_entries(entries, party_name, side))
    return AccountStatement(
        party_name=party_name,
        side=side,
        entries=tuple(own),
        total_transacted=sum_amounts(own, EntryKind.transaction_for(side)),
        total_settled=sum_amounts(own, EntryKind.payment_for(side)),
    )


def build_receipt(entry: Entry, settings: Settings) -> Receipt:
    """Build receipt or voucher data for a single entry."""
    return Receipt(
        title=RECEIPT_TITLES[entry.kind],
        number=entry.id[-5:],
        business_name=settings.app_name,
        phone=settings.phone,
        party_label="Customer" if entry.side is Side.CLIENT else "Supplier",
        party_name=entry.party_name,
        date=entry.date,
        amount=entry.amount,
        product=entry.product,
        quantity=entry.quantity,
        unit=entry.unit,
        unit_price=entry.unit_price,
    )


class ReportService:
    """Service building reports from the stored collections."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def monthly_report(self) -> list[MonthlyBucket]:
        """Monthly sales and purchase volume, most recent month first."""
        return monthly_report(
            self.db.load(Collection.SALES), self.db.load(Collection.EXPENSES)
        )

    def account_statement(self, party_name: str, side: Side) -> AccountStatement:
        """Chronological statement for one client or supplier."""
        return account_statement(self.db.load(side.collection), party_name, side)

    def receipt(self, entry: Entry) -> Receipt:
        """Receipt data for an entry using the current business settings."""
        return build_receipt(entry, self.db.load_settings())

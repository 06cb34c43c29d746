"""Balance derivation over entry collections.

All functions here are pure: they take the entries to work on and never
touch storage. Every total is filtered by entry kind before summing, since
each collection mixes volume entries with payments.
"""

from decimal import Decimal
from typing import Iterable, Sequence

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import (
    AggregateTotals,
    Collection,
    Entry,
    EntryKind,
    PartyAccount,
    Side,
)

ZERO = Decimal("0")


def sum_amounts(entries: Iterable[Entry], kind: EntryKind) -> Decimal:
    """Sum the amounts of entries of exactly one kind."""
    return sum((e.amount for e in entries if e.kind is kind), ZERO)


def listing_order(entries: Iterable[Entry]) -> list[Entry]:
    """Sort newest first: date descending, then creation time descending."""
    return sorted(entries, key=lambda e: (e.date, e.created_at), reverse=True)


def chronological_order(entries: Iterable[Entry]) -> list[Entry]:
    """Sort oldest first, the order statements are read in."""
    return sorted(entries, key=lambda e: (e.date, e.created_at))


def matches_party(entry: Entry, term: str) -> bool:
    """Case-insensitive substring match on the party name."""
    return term.lower() in entry.party_name.lower()


def party_entries(entries: Iterable[Entry], party_name: str, side: Side) -> list[Entry]:
    """Entries recorded against one party on one side (exact name match)."""
    return [e for e in entries if e.side is side and e.party_name == party_name]


def party_account(entries: Iterable[Entry], party_name: str, side: Side) -> PartyAccount:
    """Transacted and settled totals for one party."""
    own = party_entries(entries, party_name, side)
    return PartyAccount(
        name=party_name,
        side=side,
        total_transacted=sum_amounts(own, EntryKind.transaction_for(side)),
        total_settled=sum_amounts(own, EntryKind.payment_for(side)),
    )


def party_balance(entries: Iterable[Entry], party_name: str, side: Side) -> Decimal:
    """Outstanding balance for a party.

    For clients a positive balance means the client owes the business; for
    suppliers it means the business owes the supplier. A party with no
    entries has a zero balance.
    """
    return party_account(entries, party_name, side).balance


def aggregate_totals(sales: Sequence[Entry], expenses: Sequence[Entry]) -> AggregateTotals:
    """Recognized sales and purchase volume. Payments are excluded."""
    return AggregateTotals(
        total_sales=sum_amounts(sales, EntryKind.SALE),
        total_purchases=sum_amounts(expenses, EntryKind.PURCHASE),
    )


class BalanceService:
    """Service computing balances from the stored collections."""

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db

    def _entries_for(self, side: Side) -> list[Entry]:
        return self.db.load(side.collection)

    def party_balance(self, party_name: str, side: Side) -> Decimal:
        """Outstanding balance for a client or supplier."""
        return party_balance(self._entries_for(side), party_name, side)

    def aggregate_totals(self) -> AggregateTotals:
        """Sales and purchase volume across the whole ledger."""
        return aggregate_totals(
            self.db.load(Collection.SALES), self.db.load(Collection.EXPENSES)
        )

    def party_accounts(self, side: Side) -> list[PartyAccount]:
        """Balance rows for every registered party on a side.

        Clients come from the client list and suppliers from settings. Names
        that appear only on entries are not listed.
        """
        if side is Side.CLIENT:
            names = self.db.load_clients()
        else:
            names = list(self.db.load_settings().suppliers)
        entries = self._entries_for(side)
        return [party_account(entries, name, side) for name in names]

"""Plain-text rendering helpers shared by CLI commands."""

from decimal import Decimal
from typing import Optional

import click

from ledgerbook.domain.entities import Entry, EntryKind

KIND_LABELS = {
    EntryKind.SALE: "Sale",
    EntryKind.PURCHASE: "Purchase",
    EntryKind.PAYMENT_IN: "Payment In",
    EntryKind.PAYMENT_OUT: "Payment Out",
}


def format_money(amount: Optional[Decimal]) -> str:
    """Format an amount in rupees."""
    if amount is None:
        return ""
    return f"Rs. {amount:,.2f}"


def describe_item(entry: Entry) -> str:
    """Short description of what an entry was for."""
    if entry.kind.is_payment:
        return "Payment"
    if entry.quantity is not None:
        unit = f" {entry.unit}" if entry.unit else ""
        return f"{entry.product} ({entry.quantity}{unit})"
    return entry.product or ""


def echo_entry_table(entries: list[Entry]) -> None:
    """Print entries as a compact table."""
    click.echo("-" * 110)
    click.echo(
        f"{'Date':<12} {'Kind':<12} {'Party':<20} {'Item':<24} {'Amount':>16}  {'ID'}"
    )
    click.echo("-" * 110)
    for entry in entries:
        click.echo(
            f"{str(entry.date):<12} {KIND_LABELS[entry.kind]:<12} {entry.party_name[:20]:<20} "
            f"{describe_item(entry)[:24]:<24} {format_money(entry.amount):>16}  {entry.id}"
        )

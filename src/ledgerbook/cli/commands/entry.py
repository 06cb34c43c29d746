"""Entry management commands."""

from typing import Any

import click

from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.formatting import KIND_LABELS, echo_entry_table, format_money
from ledgerbook.domain.entities import Collection
from ledgerbook.domain.entry import EntryService
from ledgerbook.domain.report import ReportService
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date
from ledgerbook.utils.entry_resolver import resolve_entry


@click.group()
def entry_group():
    """Manage recorded entries."""
    pass


@entry_group.command("list")
@click.option("--sales", "collection", flag_value=Collection.SALES.value, help="Only sales and client payments")
@click.option(
    "--expenses", "collection", flag_value=Collection.EXPENSES.value, help="Only purchases and supplier payments"
)
@click.option("--search", help="Filter by party name (case-insensitive)")
@click.pass_context
def list_entries(ctx, collection: str | None, search: str | None):
    """List entries, newest first."""
    service = EntryService(ctx.obj["db"])
    entries = service.list_entries(
        collection=Collection(collection) if collection else None, search=search
    )
    if not entries:
        click.echo("No entries found.")
        return

    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    echo_entry_table(entries)


@entry_group.command("edit")
@click.argument("reference", metavar="ENTRY")
@click.option("--date", help="New date")
@click.option("--party", help="New client or supplier name")
@click.option("--product", help="New product name")
@click.option("--quantity", help="New quantity")
@click.option("--unit", help="New unit label")
@click.option("--price", help="New unit price")
@click.option("--amount", help="New amount")
@click.pass_context
def edit_entry(ctx, reference, date, party, product, quantity, unit, price, amount) -> None:
    """Edit an entry in place.

    ENTRY is an entry ID or receipt number. Only the given fields change;
    the kind of an entry can never be changed.

    Examples:
        ledgerbook entry edit 3f2a1 --amount 1900
        ledgerbook entry edit 3f2a1 --date 2025-12-03 --party "Alice Smith"
    """
    service = EntryService(ctx.obj["db"])
    try:
        existing = resolve_entry(service, reference)
    except ValueError as e:
        handle_domain_error(ctx, e)

    patch: dict[str, Any] = {}
    try:
        if date is not None:
            patch["date"] = parse_date(date)
        if quantity is not None:
            patch["quantity"] = parse_amount(quantity)
        if price is not None:
            patch["unit_price"] = parse_amount(price)
        if amount is not None:
            patch["amount"] = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    if party is not None:
        patch["party_name"] = party
    if product is not None:
        patch["product"] = product
    if unit is not None:
        patch["unit"] = unit

    if not patch:
        click.echo("Nothing to change.")
        return

    try:
        updated = service.edit_entry(existing.id, **patch)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated {KIND_LABELS[updated.kind].lower()} {updated.id}")


@entry_group.command("delete")
@click.argument("reference", metavar="ENTRY")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, reference: str, yes: bool) -> None:
    """Delete an entry.

    Examples:
        ledgerbook entry delete 3f2a1
    """
    service = EntryService(ctx.obj["db"])
    try:
        entry = resolve_entry(service, reference)
    except ValueError as e:
        handle_domain_error(ctx, e)

    description = (
        f"{KIND_LABELS[entry.kind].lower()} of {format_money(entry.amount)} "
        f"for {entry.party_name} on {entry.date}"
    )
    if not yes and not click.confirm(f"Are you sure you want to delete the {description}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_entry(entry.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted {description}")


@entry_group.command("receipt")
@click.argument("reference", metavar="ENTRY")
@click.pass_context
def show_receipt(ctx, reference: str) -> None:
    """Show the receipt or voucher for an entry."""
    db = ctx.obj["db"]
    try:
        entry = resolve_entry(EntryService(db), reference)
    except ValueError as e:
        handle_domain_error(ctx, e)
    receipt = ReportService(db).receipt(entry)

    click.echo("=" * 50)
    click.echo(receipt.business_name.center(50))
    if receipt.phone:
        click.echo(f"Phone: {receipt.phone}".center(50))
    click.echo(receipt.title.upper().center(50))
    click.echo("=" * 50)
    click.echo(f"Date: {receipt.date}    No: {receipt.number}")
    click.echo(f"{receipt.party_label}: {receipt.party_name}")
    if receipt.product:
        click.echo(f"Item: {receipt.product}")
    if receipt.quantity is not None:
        click.echo(f"Quantity: {receipt.quantity} {receipt.unit or ''}".rstrip())
    if receipt.unit_price is not None:
        click.echo(f"Rate: {format_money(receipt.unit_price)}")
    click.echo("-" * 50)
    click.echo(f"Total: {format_money(receipt.amount)}")


def register_commands(cli: click.Group) -> None:
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")

"""Commands recording sales, purchases and payments."""

from decimal import Decimal
from typing import Optional

import click

from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.formatting import KIND_LABELS, format_money
from ledgerbook.domain.entities import EntryKind
from ledgerbook.domain.entry import EntryService, suggest_amount
from ledgerbook.domain.settings import SettingsService
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date


def _parse_optional_amount(ctx, value: Optional[str], label: str) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _parse_entry_date(ctx, value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _record_transaction(
    ctx,
    kind: EntryKind,
    party: str,
    date: str,
    product: str,
    quantity: Optional[str],
    unit: Optional[str],
    price: Optional[str],
    amount: Optional[str],
) -> None:
    db = ctx.obj["db"]
    entry_service = EntryService(db)
    settings = SettingsService(db).get_settings()

    entry_date = _parse_entry_date(ctx, date)
    entry_quantity = _parse_optional_amount(ctx, quantity, "quantity")
    entry_price = _parse_optional_amount(ctx, price, "price")
    entry_amount = _parse_optional_amount(ctx, amount, "amount")

    # Fill unit and price from the catalog when not given; a zero catalog price is unset
    catalog_product = settings.find_product(product)
    if catalog_product is not None:
        if unit is None:
            unit = catalog_product.unit
        if entry_price is None and catalog_product.price > 0:
            entry_price = catalog_product.price

    if entry_amount is None:
        entry_amount = suggest_amount(entry_quantity, entry_price)
        if entry_amount is None:
            click.echo("Error: Give --amount, or --quantity with a known price", err=True)
            ctx.exit(1)

    try:
        entry = entry_service.record_entry(
            kind,
            date=entry_date,
            party_name=party,
            product=product,
            quantity=entry_quantity,
            unit=unit,
            unit_price=entry_price,
            amount=entry_amount,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded {KIND_LABELS[kind].lower()} {entry.id}")
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  {'Client' if kind is EntryKind.SALE else 'Supplier'}: {entry.party_name}")
    click.echo(f"  Product: {entry.product}")
    if entry.quantity is not None:
        click.echo(f"  Quantity: {entry.quantity} {entry.unit or ''}".rstrip())
    if entry.unit_price is not None:
        click.echo(f"  Price: {format_money(entry.unit_price)}")
    click.echo(f"  Amount: {format_money(entry.amount)}")


def _record_payment(ctx, kind: EntryKind, party: str, date: str, amount: str) -> None:
    entry_service = EntryService(ctx.obj["db"])
    entry_date = _parse_entry_date(ctx, date)
    entry_amount = _parse_optional_amount(ctx, amount, "amount")

    try:
        entry = entry_service.record_entry(
            kind, date=entry_date, party_name=party, amount=entry_amount
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    direction = "from" if kind is EntryKind.PAYMENT_IN else "to"
    click.echo(f"Recorded payment {entry.id}")
    click.echo(f"  {format_money(entry.amount)} {direction} {entry.party_name} on {entry.date}")


def _transaction_options(party_option: str, party_help: str):
    def decorator(func):
        options = [
            click.option(party_option, "party", required=True, help=party_help),
            click.option(
                "--date",
                default="today",
                show_default=True,
                help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday')",
            ),
            click.option("--product", required=True, help="Product name"),
            click.option("--quantity", help="Quantity"),
            click.option("--unit", help="Unit label (defaults to the catalog unit)"),
            click.option("--price", help="Unit price (defaults to the catalog price)"),
            click.option("--amount", help="Total amount (defaults to quantity x price)"),
        ]
        for option in reversed(options):
            func = option(func)
        return func

    return decorator


@click.command("sale")
@_transaction_options("--client", "Client name (new names are registered)")
@click.pass_context
def add_sale(ctx, party, date, product, quantity, unit, price, amount):
    """Record a credit sale to a client.

    Examples:
        ledgerbook sale --client "Alice Smith" --product Milk --quantity 10
        ledgerbook sale --client "Bob" --product Butter --amount 1500 --date yesterday
    """
    _record_transaction(ctx, EntryKind.SALE, party, date, product, quantity, unit, price, amount)


@click.command("purchase")
@_transaction_options("--supplier", "Supplier name")
@click.pass_context
def add_purchase(ctx, party, date, product, quantity, unit, price, amount):
    """Record a purchase from a supplier.

    Examples:
        ledgerbook purchase --supplier "Local Farm A" --product "Raw Milk" --quantity 50 --price 160
    """
    _record_transaction(
        ctx, EntryKind.PURCHASE, party, date, product, quantity, unit, price, amount
    )


@click.command("receive")
@click.option("--client", "party", required=True, help="Client name")
@click.option("--amount", required=True, help="Amount received")
@click.option("--date", default="today", show_default=True, help="Payment date")
@click.pass_context
def receive_payment(ctx, party: str, amount: str, date: str):
    """Record cash received from a client.

    Examples:
        ledgerbook receive --client "Alice Smith" --amount 800
    """
    _record_payment(ctx, EntryKind.PAYMENT_IN, party, date, amount)


@click.command("pay")
@click.option("--supplier", "party", required=True, help="Supplier name")
@click.option("--amount", required=True, help="Amount paid")
@click.option("--date", default="today", show_default=True, help="Payment date")
@click.pass_context
def make_payment(ctx, party: str, amount: str, date: str):
    """Record cash paid to a supplier.

    Examples:
        ledgerbook pay --supplier "Local Farm A" --amount 8000
    """
    _record_payment(ctx, EntryKind.PAYMENT_OUT, party, date, amount)


def register_commands(cli):
    """Register entry recording commands with main CLI."""
    cli.add_command(add_sale)
    cli.add_command(add_purchase)
    cli.add_command(receive_payment)
    cli.add_command(make_payment)

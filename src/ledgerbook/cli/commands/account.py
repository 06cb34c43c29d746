"""Client and supplier account commands."""

import click

from ledgerbook.cli.formatting import KIND_LABELS, describe_item, format_money
from ledgerbook.domain.balance import BalanceService
from ledgerbook.domain.entities import Side
from ledgerbook.domain.report import ReportService


def _side(supplier: bool) -> Side:
    return Side.SUPPLIER if supplier else Side.CLIENT


@click.command("accounts")
@click.option("--suppliers", is_flag=True, help="Show supplier accounts instead of clients")
@click.pass_context
def list_accounts(ctx, suppliers: bool):
    """List balances for every registered client or supplier."""
    side = _side(suppliers)
    accounts = BalanceService(ctx.obj["db"]).party_accounts(side)
    if not accounts:
        click.echo(f"No {'suppliers' if suppliers else 'clients'} registered.")
        return

    settled_label = "Paid" if suppliers else "Received"
    transacted_label = "Purchased" if suppliers else "Sold"
    click.echo(f"\n{'Supplier' if suppliers else 'Client'} Accounts:")
    click.echo("-" * 80)
    click.echo(f"{'Name':<24} {transacted_label:>18} {settled_label:>18} {'Balance':>18}")
    click.echo("-" * 80)
    for account in accounts:
        click.echo(
            f"{account.name[:24]:<24} {format_money(account.total_transacted):>18} "
            f"{format_money(account.total_settled):>18} {format_money(account.balance):>18}"
        )


@click.command("balance")
@click.argument("name", metavar="NAME")
@click.option("--supplier", is_flag=True, help="NAME is a supplier")
@click.pass_context
def show_balance(ctx, name: str, supplier: bool):
    """Show the outstanding balance for a client or supplier.

    A positive client balance is owed to the business; a positive supplier
    balance is owed by the business.
    """
    balance = BalanceService(ctx.obj["db"]).party_balance(name, _side(supplier))
    label = "Payable to" if supplier else "Receivable from"
    click.echo(f"{label} {name}: {format_money(balance)}")


@click.command("statement")
@click.argument("name", metavar="NAME")
@click.option("--supplier", is_flag=True, help="NAME is a supplier")
@click.pass_context
def show_statement(ctx, name: str, supplier: bool):
    """Print the full account statement for a client or supplier, oldest first."""
    db = ctx.obj["db"]
    statement = ReportService(db).account_statement(name, _side(supplier))
    settings = db.load_settings()

    click.echo(settings.app_name)
    click.echo(f"Account Statement: {name}")
    click.echo("-" * 90)
    if not statement.entries:
        click.echo("No entries found.")
    for line in statement.lines:
        entry = line.entry
        click.echo(
            f"{str(entry.date):<12} {KIND_LABELS[entry.kind]:<12} {describe_item(entry)[:28]:<28} "
            f"{format_money(entry.amount):>16} {format_money(line.balance):>18}"
        )
    click.echo("-" * 90)
    click.echo(f"Total {'purchased' if supplier else 'sold'}: {format_money(statement.total_transacted)}")
    click.echo(f"Total {'paid' if supplier else 'received'}: {format_money(statement.total_settled)}")
    click.echo(f"Remaining balance: {format_money(statement.remaining_balance)}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(list_accounts)
    cli.add_command(show_balance)
    cli.add_command(show_statement)

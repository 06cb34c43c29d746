"""Dashboard and monthly report commands."""

import click

from ledgerbook.cli.formatting import echo_entry_table, format_money
from ledgerbook.domain.balance import BalanceService
from ledgerbook.domain.entry import EntryService
from ledgerbook.domain.report import ReportService


@click.command("dashboard")
@click.option("--limit", default=10, show_default=True, help="Number of recent entries to show")
@click.pass_context
def dashboard(ctx, limit: int):
    """Show sales and purchase totals with the most recent entries."""
    db = ctx.obj["db"]
    totals = BalanceService(db).aggregate_totals()
    recent = EntryService(db).recent_entries(limit=limit)

    click.echo(db.load_settings().app_name)
    click.echo("=" * 50)
    click.echo(f"Total Sales:     {format_money(totals.total_sales):>20}")
    click.echo(f"Total Purchases: {format_money(totals.total_purchases):>20}")
    click.echo(f"Stock Balance:   {format_money(totals.net_position):>20}")

    if recent:
        click.echo("\nRecent Transactions:")
        echo_entry_table(recent)


@click.command("report")
@click.option("--details", is_flag=True, help="List the entries of each month")
@click.pass_context
def monthly_report(ctx, details: bool):
    """Show monthly sales and purchase volume, most recent month first.

    Payments are not counted in either volume.
    """
    buckets = ReportService(ctx.obj["db"]).monthly_report()
    if not buckets:
        click.echo("No entries found.")
        return

    click.echo(f"\n{'Month':<18} {'Sales':>18} {'Purchases':>18} {'Net':>18}")
    click.echo("-" * 75)
    for bucket in buckets:
        click.echo(
            f"{bucket.label:<18} {format_money(bucket.sales_volume):>18} "
            f"{format_money(bucket.purchase_volume):>18} {format_money(bucket.net):>18}"
        )
        if details:
            echo_entry_table(list(bucket.entries))
            click.echo("")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(dashboard)
    cli.add_command(monthly_report)

"""Settings commands."""

import click

from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.formatting import format_money
from ledgerbook.domain.settings import SettingsService
from ledgerbook.utils.product_parser import parse_name_list, parse_products


@click.group()
def settings_group():
    """View and change business settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show business settings, products, suppliers and clients."""
    service = SettingsService(ctx.obj["db"])
    settings = service.get_settings()

    click.echo(f"Business: {settings.app_name}")
    click.echo(f"Phone: {settings.phone}")
    click.echo("\nProducts:")
    for product in settings.products:
        click.echo(f"  {product.name:<20} {format_money(product.price):>14} / {product.unit}")
    click.echo(f"\nSuppliers: {', '.join(settings.suppliers) or '(none)'}")
    click.echo(f"Clients: {', '.join(service.list_clients()) or '(none)'}")


@settings_group.command("set")
@click.option("--name", help="Business name")
@click.option("--phone", help="Business phone number")
@click.option("--products", help="Product catalog, e.g. 'Milk:180:Liters, Butter:1200:kg'")
@click.option("--suppliers", help="Comma-separated supplier names")
@click.option("--clients", help="Comma-separated client names")
@click.pass_context
def set_settings(ctx, name, phone, products, suppliers, clients):
    """Change settings.

    Lists given here replace the stored lists entirely. Removing a client or
    supplier does not remove entries recorded against them.

    Examples:
        ledgerbook settings set --name "Daud Dairy" --phone 0300-7654321
        ledgerbook settings set --products "Milk:190:Liters, Butter:1250:kg"
    """
    service = SettingsService(ctx.obj["db"])
    current = service.get_settings()

    try:
        if any(value is not None for value in (name, phone, products, suppliers)):
            service.save_settings(
                app_name=name if name is not None else current.app_name,
                phone=phone if phone is not None else current.phone,
                products=parse_products(products) if products is not None else current.products,
                suppliers=parse_name_list(suppliers) if suppliers is not None else current.suppliers,
            )
        if clients is not None:
            service.save_clients(parse_name_list(clients))
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo("Settings saved.")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")

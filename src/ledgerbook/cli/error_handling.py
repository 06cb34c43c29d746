"""CLI error handling helpers."""

from typing import NoReturn

import click

from ledgerbook.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> NoReturn:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)

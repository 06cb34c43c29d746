"""Backup and restore commands."""

from pathlib import Path

import click

from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.backup import BackupService, snapshot_from_document


@click.command("backup")
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Directory to write the backup file into",
)
@click.pass_context
def backup(ctx, output_dir: Path):
    """Export all ledger data to a dated JSON backup file."""
    service = BackupService(ctx.obj["db"])
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        path = service.write_backup(output_dir)
    except OSError as e:
        click.echo(f"Error: Could not write backup to {output_dir}: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Backup written to {path}")


@click.command("restore")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def restore(ctx, backup_file: Path, yes: bool):
    """Replace all ledger data with the contents of a backup file.

    The file is validated first; if anything is wrong nothing is changed.
    """
    service = BackupService(ctx.obj["db"])
    try:
        document = service.read_backup(backup_file)
        snapshot = snapshot_from_document(document)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Backup contains {len(snapshot.sales)} sales entries, "
        f"{len(snapshot.expenses)} expense entries and {len(snapshot.clients)} clients."
    )
    if not yes and not click.confirm("Overwrite all existing data?"):
        click.echo("Restore cancelled.")
        return

    try:
        service.import_snapshot(document)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo("Restore complete.")


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup)
    cli.add_command(restore)

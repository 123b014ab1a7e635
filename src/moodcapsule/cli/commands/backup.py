"""Backup export and restore commands."""

from pathlib import Path

import click
from moodcapsule.cli.error_handling import handle_domain_error
from moodcapsule.cli.journal_state import load_preferences_or_exit, load_store_or_exit
from moodcapsule.domain.backup import create_backup, restore_backup
from moodcapsule.domain.errors import DecodeError


@click.group()
def backup_group():
    """Back up and restore the journal."""
    pass


@backup_group.command("export")
@click.argument("output", type=click.Path(dir_okay=False, writable=True, path_type=Path))
@click.pass_context
def export_backup_cmd(ctx, output: Path):
    """Write entries, avatar and settings to OUTPUT."""
    _, store = load_store_or_exit(ctx)
    _, preferences = load_preferences_or_exit(ctx)

    output.write_bytes(create_backup(store, preferences))
    click.echo(f"Exported {len(store)} entr{'y' if len(store) == 1 else 'ies'} to '{output}'")


@backup_group.command("restore")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def restore_backup_cmd(ctx, backup_file: Path, yes: bool):
    """Replace all entries and settings with the contents of BACKUP_FILE.

    Restoring overwrites the current journal; nothing is merged.
    Dark mode is not part of the backup file and is reset to off.
    """
    state, store = load_store_or_exit(ctx)
    _, preferences = load_preferences_or_exit(ctx)

    if not yes and not click.confirm(
        f"Replace {len(store)} current entr{'y' if len(store) == 1 else 'ies'} with the backup?"
    ):
        click.echo("Restore cancelled.")
        return

    try:
        restore_backup(backup_file.read_bytes(), store, preferences)
    except DecodeError as e:
        handle_domain_error(ctx, e)

    state.save_all(store, preferences)
    click.echo(f"Restored {len(store)} entr{'y' if len(store) == 1 else 'ies'} from '{backup_file}'")


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup_group, name="backup")

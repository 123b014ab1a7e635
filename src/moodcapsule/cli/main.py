"""Main CLI entry point."""

import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import click
from moodcapsule.database.factories import create_sqlite_database

# Import and register all commands at module level
from moodcapsule.cli.commands import (
    entry,
    stats,
    profile,
    backup,
    shop,
)


def _parse_timezone(ctx, param, value: str | None):
    if not value:
        return None
    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise click.BadParameter(f"Unknown timezone '{value}'")


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides MOODCAPSULE_DB_PATH environment variable)",
    envvar="MOODCAPSULE_DB_PATH",
)
@click.option(
    "--timezone",
    "tz",
    callback=_parse_timezone,
    help="IANA timezone deciding calendar days (e.g. 'Asia/Shanghai')",
    envvar="MOODCAPSULE_TIMEZONE",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, tz, debug: bool):
    """Moodcapsule - Mood journal.

    Write dated, color-tagged mood capsules, browse them by day or month,
    track your writing streak and back everything up to a single file.
    """
    ctx.ensure_object(dict)

    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    ctx.obj["tz"] = tz

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
entry.register_commands(cli)
stats.register_commands(cli)
profile.register_commands(cli)
backup.register_commands(cli)
shop.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

"""Entry management commands."""

import click
from moodcapsule.cli.entry_resolution import resolve_entry_or_exit
from moodcapsule.cli.error_handling import handle_domain_error
from moodcapsule.cli.journal_state import current_time, load_store_or_exit
from moodcapsule.domain.entities import DEFAULT_COLOR, DEFAULT_MOOD, Entry
from moodcapsule.domain.errors import DomainError
from moodcapsule.utils.color_parser import parse_color
from moodcapsule.utils.date_parser import parse_date, parse_datetime


def _short_id(entry: Entry) -> str:
    return str(entry.id)[:8]


def print_entry(entry: Entry, verbose: bool = False) -> None:
    """Print one entry in compact or detailed form."""
    if verbose:
        click.echo(f"\nEntry ID: {entry.id}")
        click.echo(f"  Date: {entry.date:%Y-%m-%d %H:%M}")
        click.echo(f"  Mood: {entry.mood}")
        click.echo(f"  Color: {entry.color}")
        click.echo(f"  Content: {entry.content}")
        click.echo("-" * 80)
        return

    first_line = entry.content.splitlines()[0] if entry.content else ""
    click.echo(
        f"{_short_id(entry):<10} {entry.date:%Y-%m-%d %H:%M}  {entry.mood:<12} "
        f"{entry.color:<8} {first_line[:40]}"
    )


@click.group()
def entry_group():
    """Write and manage entries."""
    pass


@entry_group.command("write")
@click.argument("content", required=False, default="")
@click.option("--date", "date_str", default="now", help="Entry date (YYYY-MM-DD [HH:MM] or 'today', 'yesterday')")
@click.option("--mood", default=DEFAULT_MOOD, show_default=True, help="Mood label")
@click.option("--color", default=DEFAULT_COLOR.value, show_default=True, help="Palette color or #rrggbb")
@click.pass_context
def write_entry(ctx, content: str, date_str: str, mood: str, color: str):
    """Write a new entry.

    Examples:
        moodcapsule entry write "Walked by the river"
        moodcapsule entry write "Rainy" --mood Calm --color purple --date yesterday
    """
    try:
        entry_date = parse_datetime(date_str, now=current_time(ctx))
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)
    try:
        entry_color = parse_color(color)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    state, store = load_store_or_exit(ctx)
    entry = store.create(date=entry_date, mood=mood, content=content, color=entry_color)
    state.save_store(store)
    click.echo(f"Wrote entry for {entry.date:%Y-%m-%d} (ID: {_short_id(entry)})")


@entry_group.command("edit")
@click.argument("entry_ref", metavar="ENTRY")
@click.option("--content", help="New content")
@click.option("--date", "date_str", help="New date (YYYY-MM-DD [HH:MM] or relative like 'yesterday')")
@click.option("--mood", help="New mood label")
@click.option("--color", help="New palette color or #rrggbb")
@click.pass_context
def edit_entry(ctx, entry_ref: str, content: str | None, date_str: str | None, mood: str | None, color: str | None):
    """Edit an entry.

    ENTRY is an entry ID or a unique prefix of one (at least 4 characters).
    Only the fields that are provided change.

    Examples:
        moodcapsule entry edit 1a2b --mood Tired
        moodcapsule entry edit 1a2b --content "Better now" --color green
    """
    state, store = load_store_or_exit(ctx)
    entry_id = resolve_entry_or_exit(ctx, store, entry_ref)
    current = store.get_entry(entry_id)

    new_date = current.date
    if date_str is not None:
        try:
            new_date = parse_datetime(date_str, now=current_time(ctx))
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    new_color = current.color
    if color is not None:
        try:
            new_color = parse_color(color)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    try:
        updated = store.update(
            entry_id,
            date=new_date,
            mood=mood if mood is not None else current.mood,
            content=content if content is not None else current.content,
            color=new_color,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    state.save_store(store)
    click.echo(f"Updated entry {_short_id(updated)}")


@entry_group.command("delete")
@click.argument("entry_ref", metavar="ENTRY")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, entry_ref: str, yes: bool):
    """Delete an entry.

    ENTRY is an entry ID or a unique prefix of one.
    """
    state, store = load_store_or_exit(ctx)
    entry_id = resolve_entry_or_exit(ctx, store, entry_ref)
    entry = store.get_entry(entry_id)

    if not yes and not click.confirm(f"Delete entry from {entry.date:%Y-%m-%d} (ID: {_short_id(entry)})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        store.delete(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    state.save_store(store)
    click.echo(f"Deleted entry {_short_id(entry)}")


@entry_group.command("list")
@click.option("--day", help="Only entries on this day (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--oldest-first", is_flag=True, help="Sort oldest entries first")
@click.option("--verbose", "-v", is_flag=True, help="Show full entry details")
@click.pass_context
def list_entries(ctx, day: str | None, oldest_first: bool, verbose: bool):
    """List entries, newest first."""
    _, store = load_store_or_exit(ctx)

    if day is not None:
        try:
            target = parse_date(day, today=current_time(ctx).date())
        except ValueError as e:
            click.echo(f"Error: Invalid day: {e}", err=True)
            ctx.exit(1)
        entries = sorted(store.filter_by_day(target), key=lambda e: e.date, reverse=not oldest_first)
    else:
        entries = store.timeline(descending=not oldest_first)

    if not entries:
        click.echo("No entries found.")
        return

    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    if not verbose:
        click.echo("-" * 80)
        click.echo(f"{'ID':<10} {'Date':<17} {'Mood':<12} {'Color':<8} Content")
        click.echo("-" * 80)
    for entry in entries:
        print_entry(entry, verbose=verbose)


@entry_group.command("show")
@click.argument("entry_ref", metavar="ENTRY")
@click.pass_context
def show_entry(ctx, entry_ref: str):
    """Show a single entry in full."""
    _, store = load_store_or_exit(ctx)
    entry_id = resolve_entry_or_exit(ctx, store, entry_ref)
    print_entry(store.get_entry(entry_id), verbose=True)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")

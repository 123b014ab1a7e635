"""Statistics and calendar commands."""

from datetime import date

import click
from moodcapsule.cli.journal_state import current_time, load_store_or_exit
from moodcapsule.domain.statistics import StatisticsService
from moodcapsule.utils.date_parser import parse_date

WEEKDAY_HEADER = "Mo Tu We Th Fr Sa Su"


def _today(ctx) -> date:
    return current_time(ctx).date()


def _resolve_day(ctx, value: str | None) -> date:
    if value is None:
        return _today(ctx)
    try:
        return parse_date(value, today=_today(ctx))
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)


@click.command("stats")
@click.option("--today", "today_str", help="Reference day for the streak (defaults to today)")
@click.pass_context
def show_stats(ctx, today_str: str | None):
    """Show writing statistics."""
    today = _resolve_day(ctx, today_str)
    _, store = load_store_or_exit(ctx)
    report = StatisticsService(store).build_report(today)

    click.echo(f"\nStatistics as of {report.reference_day:%Y-%m-%d}:")
    click.echo("-" * 40)
    click.echo(f"Entries:            {report.entry_count}")
    click.echo(f"Days written:       {report.total_days}")
    click.echo(f"Days this month:    {report.days_this_month}")
    click.echo(f"Current streak:     {report.current_streak} day{'s' if report.current_streak != 1 else ''}")


@click.command("calendar")
@click.option("--month", "month_str", help="Any day in the month to show (defaults to this month)")
@click.pass_context
def show_calendar(ctx, month_str: str | None):
    """Show a month calendar; days with entries are marked with '*'."""
    reference = _resolve_day(ctx, month_str)
    _, store = load_store_or_exit(ctx)
    days = StatisticsService(store).month_calendar(reference)
    today = _today(ctx)

    click.echo(f"\n{reference:%B %Y}")
    click.echo(WEEKDAY_HEADER)

    cells = ["   "] * days[0].day.weekday()
    for cal_day in days:
        marker = "*" if cal_day.has_entries else ("<" if cal_day.day == today else " ")
        cells.append(f"{cal_day.day.day:>2}{marker}")
    for start in range(0, len(cells), 7):
        click.echo("".join(cells[start:start + 7]).rstrip())

    written = sum(1 for cal_day in days if cal_day.has_entries)
    click.echo(f"\n{written} day{'s' if written != 1 else ''} with entries")


def register_commands(cli):
    """Register statistics commands with main CLI."""
    cli.add_command(show_stats)
    cli.add_command(show_calendar)

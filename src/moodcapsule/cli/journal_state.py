"""CLI helpers for loading persisted journal state."""

from datetime import datetime

import click
from moodcapsule.cli.error_handling import handle_domain_error
from moodcapsule.domain.entry import EntryStore
from moodcapsule.domain.errors import DecodeError
from moodcapsule.domain.preferences import PreferenceState
from moodcapsule.domain.state import StateService


def load_store_or_exit(ctx: click.Context) -> tuple[StateService, EntryStore]:
    """Load the entry store, or exit with a CLI error if it is corrupt."""
    service = StateService(ctx.obj["db"])
    try:
        return service, service.load_store(tz=ctx.obj.get("tz"))
    except DecodeError as e:
        handle_domain_error(ctx, e)


def load_preferences_or_exit(ctx: click.Context) -> tuple[StateService, PreferenceState]:
    """Load preferences, or exit with a CLI error if they are corrupt."""
    service = StateService(ctx.obj["db"])
    try:
        return service, service.load_preferences()
    except DecodeError as e:
        handle_domain_error(ctx, e)


def current_time(ctx: click.Context) -> datetime:
    """Return the current wall-clock time in the active timezone, naive."""
    tz = ctx.obj.get("tz")
    if tz is not None:
        return datetime.now(tz).replace(tzinfo=None)
    return datetime.now()

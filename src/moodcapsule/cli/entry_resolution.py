"""CLI helpers for entry resolution."""

from __future__ import annotations

from uuid import UUID

import click
from moodcapsule.cli.error_handling import handle_domain_error
from moodcapsule.domain.entry import EntryStore
from moodcapsule.utils.entry_resolver import resolve_entry


def resolve_entry_or_exit(ctx: click.Context, store: EntryStore, reference: str) -> UUID:
    """Resolve an entry ID or prefix, or exit with a CLI error."""
    try:
        return resolve_entry(store, reference)
    except ValueError as exc:
        handle_domain_error(ctx, exc)

"""Utility for resolving entry references to IDs."""

from uuid import UUID

from moodcapsule.domain.entry import EntryStore
from moodcapsule.domain.errors import NotFoundError, ValidationError

MIN_PREFIX_LENGTH = 4


def resolve_entry(store: EntryStore, reference: str | UUID) -> UUID:
    """Resolve a full entry ID or a unique ID prefix to an entry ID.

    Args:
        store: EntryStore instance
        reference: Full UUID, or the leading hex digits of one

    Returns:
        Entry ID

    Raises:
        NotFoundError: If no entry matches
        ValidationError: If the prefix is too short or matches several entries
    """
    if isinstance(reference, UUID):
        if store.get_entry(reference) is None:
            raise NotFoundError(f"Entry {reference} not found")
        return reference

    reference = reference.strip().lower()

    # Try to parse as a full UUID first
    try:
        entry_id = UUID(reference)
    except ValueError:
        pass
    else:
        if store.get_entry(entry_id) is None:
            raise NotFoundError(f"Entry {entry_id} not found")
        return entry_id

    if len(reference) < MIN_PREFIX_LENGTH:
        raise ValidationError(
            f"Entry reference '{reference}' is too short (need at least {MIN_PREFIX_LENGTH} characters)"
        )

    matches = [entry.id for entry in store.list_entries() if str(entry.id).startswith(reference)]
    if not matches:
        raise NotFoundError(f"Entry '{reference}' not found")
    if len(matches) > 1:
        raise ValidationError(f"Entry reference '{reference}' matches {len(matches)} entries")
    return matches[0]

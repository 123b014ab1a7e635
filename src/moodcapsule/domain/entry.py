"""Entry store domain service."""

import logging
import threading
import uuid
from dataclasses import replace
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional, Union
from uuid import UUID

from moodcapsule.domain.entities import DEFAULT_COLOR, DEFAULT_MOOD, Entry, EntryColor
from moodcapsule.domain.errors import (
    DecodeError,
    NotFoundError,
    duplicate_entry_id,
    entry_not_found,
)
from moodcapsule.utils.date_parser import as_datetime, calendar_day

logger = logging.getLogger(__name__)


def normalize_color(color: Union[EntryColor, str]) -> str:
    """Return the stored form of a palette tag or arbitrary color value."""
    if isinstance(color, EntryColor):
        return color.value
    return str(color)


class EntryStore:
    """Owns the collection of journal entries.

    Mutations are serialized behind a per-instance lock. Queries return
    snapshots, never live views.
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None, tz: Optional[tzinfo] = None):
        """Initialize entry store.

        Args:
            entries: Optional initial entries (ids must be unique)
            tz: Timezone entry dates are stored in. Aware datetimes are
                converted to it (local time when None) and kept naive,
                so every stored date is wall-clock time in one zone.
        """
        self.tz = tz
        self._lock = threading.RLock()
        self._entries: dict[UUID, Entry] = {}
        if entries is not None:
            self.replace_all(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def create(
        self,
        date: Union[date, datetime],
        mood: str = DEFAULT_MOOD,
        content: str = "",
        color: Union[EntryColor, str] = DEFAULT_COLOR,
    ) -> Entry:
        """Create a new entry with a fresh id.

        Args:
            date: Entry date; a plain date means midnight of that day
            mood: Mood label
            content: Entry text, may be empty
            color: Palette tag or arbitrary color value

        Returns:
            The created entry
        """
        with self._lock:
            entry_id = uuid.uuid4()
            while entry_id in self._entries:
                entry_id = uuid.uuid4()
            entry = Entry(
                id=entry_id,
                date=as_datetime(date, self.tz),
                mood=mood,
                content=content,
                color=normalize_color(color),
            )
            self._entries[entry_id] = entry
        logger.debug("Created entry %s on %s", entry.id, entry.date.date())
        return entry

    def update(
        self,
        entry_id: UUID,
        date: Union[date, datetime],
        mood: str,
        content: str,
        color: Union[EntryColor, str],
    ) -> Entry:
        """Replace an entry's fields, keeping its id.

        Raises:
            NotFoundError: If no entry has that id
        """
        with self._lock:
            if entry_id not in self._entries:
                raise NotFoundError(entry_not_found(entry_id))
            entry = Entry(
                id=entry_id,
                date=as_datetime(date, self.tz),
                mood=mood,
                content=content,
                color=normalize_color(color),
            )
            self._entries[entry_id] = entry
        logger.debug("Updated entry %s", entry_id)
        return entry

    def delete(self, entry_id: UUID) -> None:
        """Delete an entry.

        Deleting is not idempotent: a second delete of the same id fails.

        Raises:
            NotFoundError: If no entry has that id
        """
        with self._lock:
            if entry_id not in self._entries:
                raise NotFoundError(entry_not_found(entry_id))
            del self._entries[entry_id]
        logger.debug("Deleted entry %s", entry_id)

    def get_entry(self, entry_id: UUID) -> Optional[Entry]:
        """Get entry by id, or None if not found."""
        with self._lock:
            return self._entries.get(entry_id)

    def list_entries(self) -> list[Entry]:
        """List all entries in insertion order."""
        with self._lock:
            return list(self._entries.values())

    def filter_by_day(self, day: Union[date, datetime]) -> list[Entry]:
        """List entries falling on the same calendar day as ``day``."""
        target = calendar_day(day, self.tz)
        return [
            entry
            for entry in self.list_entries()
            if calendar_day(entry.date, self.tz) == target
        ]

    def timeline(self, descending: bool = True) -> list[Entry]:
        """List entries sorted by date, newest first by default."""
        return sorted(self.list_entries(), key=lambda entry: entry.date, reverse=descending)

    def replace_all(self, entries: Iterable[Entry]) -> None:
        """Replace the entire collection.

        Raises:
            DecodeError: If the new collection repeats an id. The store is
                left unchanged in that case.
        """
        replacement: dict[UUID, Entry] = {}
        for entry in entries:
            if entry.id in replacement:
                raise DecodeError(duplicate_entry_id(entry.id))
            replacement[entry.id] = replace(entry, date=as_datetime(entry.date, self.tz))
        with self._lock:
            self._entries = replacement
        logger.info("Replaced entry collection (%d entries)", len(replacement))

"""Loading and saving journal state through a Database."""

import logging
from datetime import tzinfo
from typing import Optional

from moodcapsule.database.base import Database
from moodcapsule.domain.codec import (
    AVATAR_KEY,
    ENTRIES_KEY,
    PREFERENCES_KEY,
    decode_avatar,
    decode_entries,
    decode_preferences,
    encode_avatar,
    encode_entries,
    encode_preferences,
)
from moodcapsule.domain.entities import Preferences
from moodcapsule.domain.entry import EntryStore
from moodcapsule.domain.preferences import PreferenceState

logger = logging.getLogger(__name__)


class StateService:
    """Service moving the entry store and preferences in and out of storage."""

    def __init__(self, db: Database):
        """Initialize state service.

        Args:
            db: Database instance
        """
        self.db = db

    def load_store(self, tz: Optional[tzinfo] = None) -> EntryStore:
        """Load the entry store. A missing key gives an empty store.

        Raises:
            DecodeError: If the stored entries cannot be decoded
        """
        data = self.db.get_value(ENTRIES_KEY)
        entries = decode_entries(data) if data is not None else []
        logger.debug("Loaded %d entries", len(entries))
        return EntryStore(entries, tz=tz)

    def save_store(self, store: EntryStore) -> None:
        """Persist the store's entries."""
        self.db.set_value(ENTRIES_KEY, encode_entries(store.list_entries()))

    def load_preferences(self) -> PreferenceState:
        """Load preferences and avatar. Missing keys give defaults.

        Raises:
            DecodeError: If the stored preferences cannot be decoded
        """
        avatar_image = decode_avatar(self.db.get_value(AVATAR_KEY))
        data = self.db.get_value(PREFERENCES_KEY)
        if data is None:
            return PreferenceState(Preferences(avatar_image=avatar_image))
        return PreferenceState(decode_preferences(data, avatar_image=avatar_image))

    def save_preferences(self, preferences: PreferenceState) -> None:
        """Persist preferences and avatar."""
        current = preferences.snapshot()
        self.db.set_values(
            {
                PREFERENCES_KEY: encode_preferences(current),
                AVATAR_KEY: encode_avatar(current.avatar_image),
            }
        )

    def save_all(self, store: EntryStore, preferences: PreferenceState) -> None:
        """Persist entries and preferences in a single write."""
        current = preferences.snapshot()
        self.db.set_values(
            {
                ENTRIES_KEY: encode_entries(store.list_entries()),
                PREFERENCES_KEY: encode_preferences(current),
                AVATAR_KEY: encode_avatar(current.avatar_image),
            }
        )

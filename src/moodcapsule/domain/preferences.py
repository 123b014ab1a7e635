"""Preference state domain service."""

import logging
import threading
from typing import Optional

from moodcapsule.domain.entities import Preferences
from moodcapsule.domain.errors import (
    InvalidNameError,
    invalid_display_name_length,
    unchanged_display_name,
)

logger = logging.getLogger(__name__)

DISPLAY_NAME_MIN_LENGTH = 2
DISPLAY_NAME_MAX_LENGTH = 20


class PreferenceState:
    """Holds the dark-mode flag, display name and avatar image.

    The host owns an instance and passes it to whatever needs it. Applying
    the theme is left to the host.
    """

    def __init__(self, preferences: Optional[Preferences] = None):
        self._lock = threading.RLock()
        self._preferences = preferences if preferences is not None else Preferences()

    @property
    def dark_mode(self) -> bool:
        return self._preferences.dark_mode

    @property
    def display_name(self) -> str:
        return self._preferences.display_name

    @property
    def avatar_image(self) -> Optional[bytes]:
        return self._preferences.avatar_image

    def snapshot(self) -> Preferences:
        """Return the current preferences as an immutable value."""
        with self._lock:
            return self._preferences

    def apply(self, preferences: Preferences) -> None:
        """Replace all preferences at once."""
        with self._lock:
            self._preferences = preferences

    def set_dark_mode(self, enabled: bool) -> None:
        with self._lock:
            self._preferences = Preferences(
                dark_mode=bool(enabled),
                display_name=self._preferences.display_name,
                avatar_image=self._preferences.avatar_image,
            )

    def set_display_name(self, candidate: str) -> str:
        """Validate and store a new display name.

        The candidate is trimmed before validation. It must be 2 to 20
        characters long and differ from the current name.

        Args:
            candidate: Proposed display name

        Returns:
            The stored (trimmed) display name

        Raises:
            InvalidNameError: If validation fails; the name is left unchanged
        """
        name = candidate.strip()
        if not DISPLAY_NAME_MIN_LENGTH <= len(name) <= DISPLAY_NAME_MAX_LENGTH:
            raise InvalidNameError(
                invalid_display_name_length(name, DISPLAY_NAME_MIN_LENGTH, DISPLAY_NAME_MAX_LENGTH)
            )
        with self._lock:
            if name == self._preferences.display_name:
                raise InvalidNameError(unchanged_display_name(name))
            self._preferences = Preferences(
                dark_mode=self._preferences.dark_mode,
                display_name=name,
                avatar_image=self._preferences.avatar_image,
            )
        logger.debug("Display name changed")
        return name

    def set_avatar(self, avatar_image: Optional[bytes]) -> None:
        with self._lock:
            self._preferences = Preferences(
                dark_mode=self._preferences.dark_mode,
                display_name=self._preferences.display_name,
                avatar_image=bytes(avatar_image) if avatar_image is not None else None,
            )

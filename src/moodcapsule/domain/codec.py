"""Encoders and decoders for the persisted journal state.

The host application keeps three logical keys: ``entries``, ``avatarImage``
and ``preferences``. Each has a pure encode/decode pair here; where the
bytes end up is the host's business.
"""

import json
import logging
from datetime import datetime
from typing import Any, Iterable, Optional
from uuid import UUID

from moodcapsule.domain.entities import Entry, Preferences, UNSET_DISPLAY_NAME
from moodcapsule.domain.errors import DecodeError, duplicate_entry_id, unsupported_version

logger = logging.getLogger(__name__)

ENTRIES_KEY = "entries"
AVATAR_KEY = "avatarImage"
PREFERENCES_KEY = "preferences"

ENTRIES_FORMAT_VERSION = 1

_ENTRY_FIELDS = ("id", "date", "mood", "content", "color")


def _load_json(data: bytes, kind: str) -> Any:
    if not isinstance(data, (bytes, bytearray)):
        raise DecodeError(f"Expected bytes for {kind}, got {type(data).__name__}")
    try:
        return json.loads(bytes(data).decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Malformed {kind} payload: {e}") from e


def _dump_json(payload: Any) -> bytes:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def entry_to_dict(entry: Entry) -> dict[str, str]:
    """Convert an entry to its JSON-ready dictionary."""
    return {
        "id": str(entry.id),
        "date": entry.date.isoformat(),
        "mood": entry.mood,
        "content": entry.content,
        "color": entry.color,
    }


def entry_from_dict(raw: Any) -> Entry:
    """Build an entry from its decoded dictionary.

    Raises:
        DecodeError: If a field is missing or has the wrong type
    """
    if not isinstance(raw, dict):
        raise DecodeError(f"Entry record must be an object, got {type(raw).__name__}")
    missing = [name for name in _ENTRY_FIELDS if name not in raw]
    if missing:
        raise DecodeError(f"Entry record is missing field(s): {', '.join(missing)}")
    for name in _ENTRY_FIELDS:
        if not isinstance(raw[name], str):
            raise DecodeError(f"Entry field '{name}' must be a string")

    try:
        entry_id = UUID(raw["id"])
    except ValueError as e:
        raise DecodeError(f"Invalid entry id '{raw['id']}'") from e
    try:
        entry_date = datetime.fromisoformat(raw["date"])
    except ValueError as e:
        raise DecodeError(f"Invalid entry date '{raw['date']}'") from e

    return Entry(
        id=entry_id,
        date=entry_date,
        mood=raw["mood"],
        content=raw["content"],
        color=raw["color"],
    )


def encode_entries(entries: Iterable[Entry]) -> bytes:
    """Encode an entry collection to bytes."""
    return _dump_json(
        {
            "version": ENTRIES_FORMAT_VERSION,
            "entries": [entry_to_dict(entry) for entry in entries],
        }
    )


def decode_entries(data: bytes) -> list[Entry]:
    """Decode bytes produced by :func:`encode_entries`.

    Raises:
        DecodeError: If the payload is malformed, has an unknown version or
            repeats an entry id
    """
    payload = _load_json(data, "entries")
    if not isinstance(payload, dict):
        raise DecodeError("Entries payload must be an object")
    version = payload.get("version")
    if version != ENTRIES_FORMAT_VERSION:
        raise DecodeError(unsupported_version("entries", version, ENTRIES_FORMAT_VERSION))
    records = payload.get("entries")
    if not isinstance(records, list):
        raise DecodeError("Entries payload has no entry list")

    entries = [entry_from_dict(record) for record in records]
    seen = set()
    for entry in entries:
        if entry.id in seen:
            raise DecodeError(duplicate_entry_id(entry.id))
        seen.add(entry.id)
    logger.debug("Decoded %d entries", len(entries))
    return entries


def encode_preferences(preferences: Preferences) -> bytes:
    """Encode dark mode and display name. The avatar is stored separately."""
    return _dump_json(
        {
            "darkMode": preferences.dark_mode,
            "displayName": preferences.display_name,
        }
    )


def decode_preferences(data: bytes, avatar_image: Optional[bytes] = None) -> Preferences:
    """Decode bytes produced by :func:`encode_preferences`.

    Missing keys fall back to defaults, like reading an unset default.

    Raises:
        DecodeError: If the payload is malformed or a value has the wrong type
    """
    payload = _load_json(data, "preferences")
    if not isinstance(payload, dict):
        raise DecodeError("Preferences payload must be an object")

    dark_mode = payload.get("darkMode", False)
    display_name = payload.get("displayName", UNSET_DISPLAY_NAME)
    if not isinstance(dark_mode, bool):
        raise DecodeError("Preference 'darkMode' must be a boolean")
    if not isinstance(display_name, str):
        raise DecodeError("Preference 'displayName' must be a string")

    return Preferences(
        dark_mode=dark_mode,
        display_name=display_name,
        avatar_image=avatar_image,
    )


def encode_avatar(avatar_image: Optional[bytes]) -> Optional[bytes]:
    """Avatar bytes are stored as-is; ``None`` means the key is removed."""
    if avatar_image is None:
        return None
    return bytes(avatar_image)


def decode_avatar(data: Optional[bytes]) -> Optional[bytes]:
    """Return stored avatar bytes, or ``None`` when nothing is stored.

    Raises:
        DecodeError: If the stored value is not bytes
    """
    if data is None:
        return None
    if not isinstance(data, (bytes, bytearray)):
        raise DecodeError(f"Avatar image must be bytes, got {type(data).__name__}")
    return bytes(data)

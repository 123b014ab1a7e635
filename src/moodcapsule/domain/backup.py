"""Backup export and restore.

A backup bundles the encoded entry collection, the avatar image and a flat
settings map. Restoring is a full replace of both the entry store and the
preferences, never a merge.

Wire format (JSON)::

    {
      "schemaVersion": 1,
      "entries": "<base64 of the native entry encoding>",
      "avatarImage": "<base64>" | null,
      "settings": {"displayName": "..."}
    }

Only string-valued settings are written, so ``darkMode`` does not survive
the wire encoding and restores as ``False``.
"""

import base64
import binascii
import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

from moodcapsule.domain.codec import decode_entries, encode_entries
from moodcapsule.domain.entities import BackupSnapshot, Preferences, UNSET_DISPLAY_NAME
from moodcapsule.domain.entry import EntryStore
from moodcapsule.domain.errors import DecodeError, unsupported_version
from moodcapsule.domain.preferences import PreferenceState

logger = logging.getLogger(__name__)

BACKUP_SCHEMA_VERSION = 1

DARK_MODE_SETTING = "darkMode"
DISPLAY_NAME_SETTING = "displayName"


def export_backup(store: EntryStore, preferences: PreferenceState) -> BackupSnapshot:
    """Capture the store's entries and the current preferences."""
    entries = store.list_entries()
    current = preferences.snapshot()
    logger.info("Exporting backup with %d entries", len(entries))
    return BackupSnapshot(
        schema_version=BACKUP_SCHEMA_VERSION,
        entries=encode_entries(entries),
        avatar_image=current.avatar_image,
        settings={
            DARK_MODE_SETTING: current.dark_mode,
            DISPLAY_NAME_SETTING: current.display_name,
        },
    )


def _settings_to_preferences(settings: Any, avatar_image: Optional[bytes]) -> Preferences:
    if not isinstance(settings, Mapping):
        raise DecodeError("Backup settings must be a map")
    for key, value in settings.items():
        if not isinstance(key, str):
            raise DecodeError(f"Backup setting key {key!r} is not a string")
        if not isinstance(value, (str, bool)):
            raise DecodeError(f"Backup setting '{key}' has unsupported value type")

    dark_mode = settings.get(DARK_MODE_SETTING)
    display_name = settings.get(DISPLAY_NAME_SETTING)
    return Preferences(
        dark_mode=dark_mode if isinstance(dark_mode, bool) else False,
        display_name=display_name if isinstance(display_name, str) else UNSET_DISPLAY_NAME,
        avatar_image=avatar_image,
    )


def import_backup(
    snapshot: BackupSnapshot, store: EntryStore, preferences: PreferenceState
) -> None:
    """Replace the store's entries and the preferences with a snapshot's.

    Everything is decoded before any state changes, so on failure both
    targets are left exactly as they were.

    Raises:
        DecodeError: If the snapshot has an unknown schema version, corrupt
            entry bytes or an unparseable settings map
    """
    if snapshot.schema_version != BACKUP_SCHEMA_VERSION:
        raise DecodeError(
            unsupported_version("backup", snapshot.schema_version, BACKUP_SCHEMA_VERSION)
        )
    if snapshot.avatar_image is not None and not isinstance(
        snapshot.avatar_image, (bytes, bytearray)
    ):
        raise DecodeError("Backup avatar image must be bytes")

    entries = decode_entries(snapshot.entries)
    avatar_image = bytes(snapshot.avatar_image) if snapshot.avatar_image is not None else None
    restored = _settings_to_preferences(snapshot.settings, avatar_image)

    store.replace_all(entries)
    preferences.apply(restored)
    logger.info("Restored backup with %d entries", len(entries))


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(value: Any, field_name: str) -> bytes:
    if not isinstance(value, str):
        raise DecodeError(f"Backup field '{field_name}' must be a base64 string")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Backup field '{field_name}' is not valid base64: {e}") from e


def encode_snapshot(snapshot: BackupSnapshot) -> bytes:
    """Serialize a snapshot to its portable JSON form.

    Non-string settings are dropped.
    """
    settings = {
        key: value for key, value in snapshot.settings.items() if isinstance(value, str)
    }
    document = {
        "schemaVersion": snapshot.schema_version,
        "entries": _b64encode(snapshot.entries),
        "avatarImage": (
            _b64encode(snapshot.avatar_image) if snapshot.avatar_image is not None else None
        ),
        "settings": settings,
    }
    return json.dumps(document, ensure_ascii=False, indent=2).encode("utf-8")


def decode_snapshot(data: bytes) -> BackupSnapshot:
    """Parse bytes produced by :func:`encode_snapshot`.

    Raises:
        DecodeError: If the document is truncated, malformed or of an
            unsupported schema version
    """
    try:
        document = json.loads(bytes(data).decode("utf-8"))
    except (TypeError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Malformed backup document: {e}") from e
    if not isinstance(document, dict):
        raise DecodeError("Backup document must be an object")

    version = document.get("schemaVersion")
    if version != BACKUP_SCHEMA_VERSION or isinstance(version, bool):
        raise DecodeError(unsupported_version("backup", version, BACKUP_SCHEMA_VERSION))

    entries = _b64decode(document.get("entries"), "entries")
    raw_avatar = document.get("avatarImage")
    avatar_image = _b64decode(raw_avatar, "avatarImage") if raw_avatar is not None else None

    settings = document.get("settings")
    if not isinstance(settings, dict):
        raise DecodeError("Backup settings must be a map")
    for key, value in settings.items():
        if not isinstance(value, str):
            raise DecodeError(f"Backup setting '{key}' must be a string")

    return BackupSnapshot(
        schema_version=version,
        entries=entries,
        avatar_image=avatar_image,
        settings=settings,
    )


def create_backup(store: EntryStore, preferences: PreferenceState) -> bytes:
    """Export and serialize in one step."""
    return encode_snapshot(export_backup(store, preferences))


def restore_backup(data: bytes, store: EntryStore, preferences: PreferenceState) -> None:
    """Parse serialized backup bytes and apply them.

    Raises:
        DecodeError: If the bytes cannot be parsed or applied; state is
            unchanged in that case
    """
    import_backup(decode_snapshot(data), store, preferences)

"""Tests for backup export and restore."""

import base64
import json
import pytest
from datetime import datetime

from moodcapsule.domain.backup import (
    BACKUP_SCHEMA_VERSION,
    create_backup,
    decode_snapshot,
    encode_snapshot,
    export_backup,
    import_backup,
    restore_backup,
)
from moodcapsule.domain.codec import decode_entries
from moodcapsule.domain.entities import BackupSnapshot, Preferences
from moodcapsule.domain.entry import EntryStore
from moodcapsule.domain.errors import DecodeError
from moodcapsule.domain.preferences import PreferenceState


@pytest.fixture
def populated_preferences():
    """Preferences with every field set."""
    return PreferenceState(
        Preferences(dark_mode=True, display_name="Alice", avatar_image=b"\x89PNG\r\n\x1a\nabc")
    )


@pytest.fixture
def target():
    """A non-empty store and preferences to restore into."""
    store = EntryStore()
    store.create(date=datetime(2020, 6, 1), mood="Old", content="keep me", color="red")
    prefs = PreferenceState(Preferences(dark_mode=False, display_name="Bob", avatar_image=b"old"))
    return store, prefs


def _state(store, prefs):
    return store.list_entries(), prefs.snapshot()


class TestExport:
    """Tests for export_backup."""

    def test_export_contents(self, store, sample_entries, populated_preferences):
        snapshot = export_backup(store, populated_preferences)

        assert snapshot.schema_version == BACKUP_SCHEMA_VERSION
        assert decode_entries(snapshot.entries) == sample_entries
        assert snapshot.avatar_image == b"\x89PNG\r\n\x1a\nabc"
        assert snapshot.settings == {"darkMode": True, "displayName": "Alice"}

    def test_export_without_avatar(self, store, preferences):
        snapshot = export_backup(store, preferences)
        assert snapshot.avatar_image is None
        assert decode_entries(snapshot.entries) == []


class TestImport:
    """Tests for import_backup."""

    def test_round_trip_snapshot(self, store, sample_entries, populated_preferences, target):
        snapshot = export_backup(store, populated_preferences)
        target_store, target_prefs = target

        import_backup(snapshot, target_store, target_prefs)

        assert target_store.list_entries() == store.list_entries()
        assert target_prefs.snapshot() == populated_preferences.snapshot()

    def test_import_replaces_rather_than_merges(self, store, sample_entries, preferences, target):
        target_store, target_prefs = target
        import_backup(export_backup(store, preferences), target_store, target_prefs)

        assert all(entry.content != "keep me" for entry in target_store.list_entries())
        assert len(target_store) == 3

    def test_import_missing_avatar_clears_it(self, store, preferences, target):
        target_store, target_prefs = target
        import_backup(export_backup(store, preferences), target_store, target_prefs)
        assert target_prefs.avatar_image is None

    def test_wrong_version_leaves_state_unchanged(self, store, sample_entries, preferences, target):
        target_store, target_prefs = target
        before = _state(target_store, target_prefs)
        good = export_backup(store, preferences)
        bad = BackupSnapshot(
            schema_version=99,
            entries=good.entries,
            avatar_image=None,
            settings=dict(good.settings),
        )

        with pytest.raises(DecodeError, match="version"):
            import_backup(bad, target_store, target_prefs)
        assert _state(target_store, target_prefs) == before

    def test_truncated_entries_leave_state_unchanged(self, store, sample_entries, preferences, target):
        target_store, target_prefs = target
        before = _state(target_store, target_prefs)
        good = export_backup(store, preferences)
        bad = BackupSnapshot(
            schema_version=BACKUP_SCHEMA_VERSION,
            entries=good.entries[: len(good.entries) // 2],
            avatar_image=b"new",
            settings={"displayName": "Mallory"},
        )

        with pytest.raises(DecodeError):
            import_backup(bad, target_store, target_prefs)
        assert _state(target_store, target_prefs) == before

    def test_bad_settings_leave_state_unchanged(self, store, sample_entries, preferences, target):
        target_store, target_prefs = target
        before = _state(target_store, target_prefs)
        good = export_backup(store, preferences)
        bad = BackupSnapshot(
            schema_version=BACKUP_SCHEMA_VERSION,
            entries=good.entries,
            avatar_image=None,
            settings={"displayName": 42},
        )

        with pytest.raises(DecodeError):
            import_backup(bad, target_store, target_prefs)
        assert _state(target_store, target_prefs) == before


class TestWireFormat:
    """Tests for the serialized backup document."""

    def test_document_layout(self, store, sample_entries, populated_preferences):
        document = json.loads(create_backup(store, populated_preferences))

        assert document["schemaVersion"] == BACKUP_SCHEMA_VERSION
        assert base64.b64decode(document["entries"]) == export_backup(store, populated_preferences).entries
        assert base64.b64decode(document["avatarImage"]) == b"\x89PNG\r\n\x1a\nabc"
        assert document["settings"] == {"displayName": "Alice"}

    def test_wire_round_trip_drops_dark_mode(self, store, sample_entries, populated_preferences, target):
        target_store, target_prefs = target

        restore_backup(create_backup(store, populated_preferences), target_store, target_prefs)

        assert target_store.list_entries() == store.list_entries()
        assert target_prefs.display_name == "Alice"
        assert target_prefs.avatar_image == populated_preferences.avatar_image
        # darkMode is a boolean setting and is not written to the wire
        assert target_prefs.dark_mode is False

    def test_decode_encode(self, store, sample_entries, populated_preferences):
        snapshot = export_backup(store, populated_preferences)
        decoded = decode_snapshot(encode_snapshot(snapshot))

        assert decoded.schema_version == snapshot.schema_version
        assert decoded.entries == snapshot.entries
        assert decoded.avatar_image == snapshot.avatar_image
        assert decoded.settings == {"displayName": "Alice"}

    def test_null_avatar(self, store, preferences):
        document = json.loads(create_backup(store, preferences))
        assert document["avatarImage"] is None
        assert decode_snapshot(create_backup(store, preferences)).avatar_image is None

    @pytest.mark.parametrize(
        "payload",
        [
            b"",
            b"not json",
            b"[1, 2, 3]",
            b'{"schemaVersion": 2, "entries": "", "avatarImage": null, "settings": {}}',
            b'{"schemaVersion": 1, "avatarImage": null, "settings": {}}',
            b'{"schemaVersion": 1, "entries": "***", "avatarImage": null, "settings": {}}',
            b'{"schemaVersion": 1, "entries": "", "avatarImage": 5, "settings": {}}',
            b'{"schemaVersion": 1, "entries": "", "avatarImage": null, "settings": []}',
            b'{"schemaVersion": 1, "entries": "", "avatarImage": null, "settings": {"darkMode": true}}',
        ],
    )
    def test_decode_rejects_malformed(self, payload):
        with pytest.raises(DecodeError):
            decode_snapshot(payload)

    def test_restore_truncated_file_leaves_state_unchanged(self, store, sample_entries, preferences, target):
        target_store, target_prefs = target
        before = _state(target_store, target_prefs)
        data = create_backup(store, preferences)

        with pytest.raises(DecodeError):
            restore_backup(data[: len(data) - 10], target_store, target_prefs)
        assert _state(target_store, target_prefs) == before

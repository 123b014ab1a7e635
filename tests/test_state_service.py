"""Tests for StateService and the key-value database."""

import pytest
from datetime import datetime

from moodcapsule.database.factories import create_memory_database, create_sqlite_database
from moodcapsule.domain.codec import AVATAR_KEY, ENTRIES_KEY, PREFERENCES_KEY
from moodcapsule.domain.entities import Preferences
from moodcapsule.domain.errors import DecodeError
from moodcapsule.domain.preferences import PreferenceState
from moodcapsule.domain.state import StateService


class TestDatabaseInterface:
    """Tests for the key-value Database implementation."""

    def test_get_missing_key(self, temp_db):
        assert temp_db.get_value("nothing") is None

    def test_set_and_get(self, temp_db):
        temp_db.set_value("k", b"value")
        assert temp_db.get_value("k") == b"value"

    def test_overwrite(self, temp_db):
        temp_db.set_value("k", b"one")
        temp_db.set_value("k", b"two")
        assert temp_db.get_value("k") == b"two"
        assert temp_db.list_keys() == ["k"]

    def test_delete(self, temp_db):
        temp_db.set_value("k", b"one")
        temp_db.delete_value("k")
        temp_db.delete_value("k")
        assert temp_db.get_value("k") is None

    def test_set_values_with_removal(self, temp_db):
        temp_db.set_value("gone", b"x")
        temp_db.set_values({"a": b"1", "b": b"2", "gone": None})
        assert temp_db.list_keys() == ["a", "b"]

    def test_persists_across_connections(self, temp_db):
        temp_db.set_value("k", b"kept")
        temp_db.disconnect()

        other = create_sqlite_database(database_path=temp_db.database_path)
        assert other.get_value("k") == b"kept"
        other.disconnect()

    def test_env_var_path(self, temp_db, monkeypatch):
        monkeypatch.setenv("MOODCAPSULE_DB_PATH", temp_db.database_path)
        temp_db.set_value("k", b"env")

        db = create_sqlite_database()
        assert db.get_value("k") == b"env"
        db.disconnect()

    def test_memory_database(self):
        db = create_memory_database()
        db.set_value("k", b"v")
        assert db.get_value("k") == b"v"
        db.disconnect()


class TestStateService:
    """Tests for loading and saving journal state."""

    def test_empty_database_gives_defaults(self, state_service):
        assert len(state_service.load_store()) == 0
        assert state_service.load_preferences().snapshot() == Preferences()

    def test_store_round_trip(self, state_service, store, sample_entries):
        state_service.save_store(store)
        loaded = state_service.load_store()
        assert loaded.list_entries() == sample_entries

    def test_preferences_round_trip(self, state_service):
        prefs = PreferenceState(Preferences(dark_mode=True, display_name="Alice", avatar_image=b"img"))
        state_service.save_preferences(prefs)
        assert state_service.load_preferences().snapshot() == prefs.snapshot()

    def test_keys_written(self, state_service, temp_db, store, sample_entries):
        prefs = PreferenceState(Preferences(avatar_image=b"img"))
        state_service.save_all(store, prefs)
        assert temp_db.list_keys() == sorted([AVATAR_KEY, ENTRIES_KEY, PREFERENCES_KEY])

    def test_clearing_avatar_removes_key(self, state_service, temp_db):
        prefs = PreferenceState(Preferences(avatar_image=b"img"))
        state_service.save_preferences(prefs)
        prefs.set_avatar(None)
        state_service.save_preferences(prefs)

        assert temp_db.get_value(AVATAR_KEY) is None
        assert state_service.load_preferences().avatar_image is None

    def test_load_store_passes_timezone(self, state_service):
        from datetime import timezone

        store = state_service.load_store(tz=timezone.utc)
        assert store.tz is timezone.utc

    def test_corrupt_entries_raise(self, state_service, temp_db):
        temp_db.set_value(ENTRIES_KEY, b"garbage")
        with pytest.raises(DecodeError):
            state_service.load_store()

    def test_corrupt_preferences_raise(self, state_service, temp_db):
        temp_db.set_value(PREFERENCES_KEY, b'{"darkMode": "maybe"}')
        with pytest.raises(DecodeError):
            state_service.load_preferences()

    def test_mutation_then_save(self, state_service, store):
        entry = store.create(date=datetime(2025, 1, 1), content="x")
        state_service.save_store(store)
        store.delete(entry.id)
        state_service.save_store(store)
        assert len(state_service.load_store()) == 0

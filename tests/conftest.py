"""Shared pytest fixtures for moodcapsule tests."""

import tempfile
import os
from datetime import datetime
import pytest

from moodcapsule.database.factories import create_sqlite_database
from moodcapsule.domain.entry import EntryStore
from moodcapsule.domain.preferences import PreferenceState
from moodcapsule.domain.state import StateService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def store():
    """Create an empty EntryStore."""
    return EntryStore()


@pytest.fixture
def preferences():
    """Create a PreferenceState with default values."""
    return PreferenceState()


@pytest.fixture
def state_service(temp_db):
    """Create a StateService with a temporary database."""
    return StateService(temp_db)


@pytest.fixture
def sample_entries(store):
    """Create three entries on consecutive days in January 2025."""
    return [
        store.create(date=datetime(2025, 1, 10, 9, 0), mood="Happy", content="First", color="red"),
        store.create(date=datetime(2025, 1, 11, 21, 30), mood="Calm", content="Second", color="blue"),
        store.create(date=datetime(2025, 1, 12, 8, 15), mood="Tired", content="Third", color="#ff8800"),
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

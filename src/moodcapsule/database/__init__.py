"""Database layer for moodcapsule application."""

from moodcapsule.database.base import Database
from moodcapsule.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]

"""Abstract key-value database interface."""

from abc import ABC, abstractmethod
from typing import Optional


class Database(ABC):
    """Abstract database interface for moodcapsule.

    The journal state is kept as opaque byte blobs under string keys.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def get_value(self, key: str) -> Optional[bytes]:
        """Get the blob stored under key, or None if absent."""
        pass

    @abstractmethod
    def set_value(self, key: str, value: bytes) -> None:
        """Store a blob under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete_value(self, key: str) -> None:
        """Remove key. Removing an absent key is a no-op."""
        pass

    @abstractmethod
    def set_values(self, values: dict[str, Optional[bytes]]) -> None:
        """Write several keys in one transaction. None removes a key."""
        pass

    @abstractmethod
    def list_keys(self) -> list[str]:
        """List all stored keys."""
        pass

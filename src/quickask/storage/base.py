"""Abstract base class for local key/value storage backends.

This module defines the interface for durable client-side storage,
modelled on a browser's localStorage: string keys mapping to string values.
The abstraction hides:
- Storage format (SQLite table, in-memory dict)
- Persistence mechanism (file, database, in-memory)
- Connection management
"""

from abc import ABC, abstractmethod


class LocalStorage(ABC):
    """Abstract local storage backend.

    Values are opaque strings; callers own serialization. Every write
    replaces the previous value for the key in full.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the storage backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the storage backend gracefully."""

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        """Return the stored value for key, or None if absent."""

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store value under key, overwriting any previous value."""

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Remove key if present."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

"""
Abstract Storage Interface

Persistence is a plain string key-value store, the same shape as browser
local storage: one key per collection, one JSON document per key.

Defining it as an interface lets us:
1. Keep data in a local directory for real use
2. Use in-memory storage for testing
3. Keep the record store decoupled from where bytes end up
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Abstract interface for key-value storage.

    Values are opaque strings; the record store owns serialization.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under ``key``.

        Returns:
            The stored string, or None if the key was never written

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Replace the value stored under ``key``.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is not an error."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """All keys currently stored."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """The backend could not be read."""
    pass


class StorageWriteError(StorageError):
    """The backend rejected a write."""
    pass


class StorageKeyError(StorageError, ValueError):
    """The key is not valid for this backend."""
    pass

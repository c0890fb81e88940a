"""
Storage Services Package

Provides the key-value storage interface, its local-file and in-memory
implementations, and the record store built on top of them.
"""

from fintrack.services.storage.interface import (
    KeyValueStorage,
    StorageError,
    StorageKeyError,
    StorageReadError,
    StorageWriteError,
)
from fintrack.services.storage.json_file import JsonFileStorage
from fintrack.services.storage.memory import InMemoryStorage
from fintrack.services.storage.record_store import (
    CollectionName,
    RecordStore,
)

__all__ = [
    # Interface
    "KeyValueStorage",
    # Exceptions
    "StorageError",
    "StorageKeyError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
    # Record store
    "CollectionName",
    "RecordStore",
]

"""Services package."""

from fintrack.services.storage import (
    CollectionName,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    RecordStore,
    StorageError,
    StorageKeyError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "CollectionName",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "RecordStore",
    "StorageError",
    "StorageKeyError",
    "StorageReadError",
    "StorageWriteError",
]

"""
Record Store

Owns the four collections (transactions, bills, budgets, investments)
and their round trip to key-value storage.

- Loading fails open: a missing key, corrupt JSON or a value that is not
  a list becomes an empty collection. Individual records that no longer
  match the schema are skipped. Nothing is raised to the caller.
- Saving writes the complete collection under its own key. Collections
  are saved independently; there is no grouping across them.
- Write failures are logged and not retried. The in-memory collection
  stays authoritative until the next load.
"""

import json
from enum import Enum
from typing import Optional

import structlog
from pydantic import ValidationError

from fintrack.models.records import Bill, Budget, Investment, Record, Transaction
from fintrack.services.storage.interface import KeyValueStorage, StorageError


logger = structlog.get_logger("fintrack.storage")


class CollectionName(str, Enum):
    TRANSACTIONS = "transactions"
    BILLS = "bills"
    BUDGETS = "budgets"
    INVESTMENTS = "investments"


RECORD_TYPES: dict[CollectionName, type[Record]] = {
    CollectionName.TRANSACTIONS: Transaction,
    CollectionName.BILLS: Bill,
    CollectionName.BUDGETS: Budget,
    CollectionName.INVESTMENTS: Investment,
}

DEFAULT_KEY_PREFIX = "fintrack_"


class RecordStore:
    """
    In-memory collections backed by key-value storage.

    Collections are tuples of frozen records, so handing one out never
    lets a caller change the store behind its back.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ):
        self._storage = storage
        self._key_prefix = key_prefix
        self._collections: dict[CollectionName, tuple] = {
            name: () for name in CollectionName
        }

    def key_for(self, name: CollectionName) -> str:
        return f"{self._key_prefix}{name.value}"

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """Load all four collections from storage, failing open."""
        for name in CollectionName:
            self._collections[name] = self._load_collection(name)

    def _read_raw(self, name: CollectionName) -> Optional[list]:
        key = self.key_for(name)
        try:
            raw = self._storage.get(key)
        except StorageError as e:
            logger.warning("collection_read_failed", key=key, error=str(e))
            return None

        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning("collection_corrupt", key=key, error=str(e))
            return None

        if not isinstance(data, list):
            logger.warning(
                "collection_not_a_list",
                key=key,
                found=type(data).__name__,
            )
            return None
        return data

    def _load_collection(self, name: CollectionName) -> tuple:
        data = self._read_raw(name)
        if not data:
            return ()

        model = RECORD_TYPES[name]
        records = []
        seen_ids = set()
        for index, item in enumerate(data):
            try:
                record = model.model_validate(item)
            except ValidationError as e:
                logger.warning(
                    "record_skipped",
                    collection=name.value,
                    index=index,
                    errors=e.error_count(),
                )
                continue
            if record.id in seen_ids:
                logger.warning(
                    "duplicate_record_skipped",
                    collection=name.value,
                    record_id=str(record.id),
                )
                continue
            seen_ids.add(record.id)
            records.append(record)

        logger.debug("collection_loaded", collection=name.value, count=len(records))
        return tuple(records)

    def save(self, name: CollectionName) -> bool:
        """
        Write one collection back in full.

        Returns False if the backend rejected the write.
        """
        key = self.key_for(name)
        payload = json.dumps(
            [record.to_storage_dict() for record in self._collections[name]]
        )
        try:
            self._storage.set(key, payload)
        except StorageError as e:
            logger.error("collection_write_failed", key=key, error=str(e))
            return False
        return True

    def replace(self, name: CollectionName, collection: tuple) -> bool:
        """Swap in a new collection value and persist it."""
        self._collections[name] = tuple(collection)
        return self.save(name)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def get(self, name: CollectionName) -> tuple:
        return self._collections[name]

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._collections[CollectionName.TRANSACTIONS]

    @property
    def bills(self) -> tuple[Bill, ...]:
        return self._collections[CollectionName.BILLS]

    @property
    def budgets(self) -> tuple[Budget, ...]:
        return self._collections[CollectionName.BUDGETS]

    @property
    def investments(self) -> tuple[Investment, ...]:
        return self._collections[CollectionName.INVESTMENTS]

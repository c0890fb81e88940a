"""Tests for key-value storage backends and the record store."""

import json
import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from fintrack.models import Bill, Budget, Investment, Transaction
from fintrack.services.storage import (
    CollectionName,
    InMemoryStorage,
    JsonFileStorage,
    RecordStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
)


def make_transaction(description="Lunch", amount="12.50"):
    return Transaction(
        date=date(2024, 1, 2),
        amount=Decimal(amount),
        category="Food",
        description=description,
        type="expense",
    )


class BrokenStorage(InMemoryStorage):
    """Storage whose reads and/or writes always fail."""

    def __init__(self, fail_reads=False, fail_writes=False, initial=None):
        super().__init__(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def get(self, key):
        if self.fail_reads:
            raise StorageReadError("disk on fire")
        return super().get(key)

    def set(self, key, value):
        if self.fail_writes:
            raise StorageWriteError("disk full")
        super().set(key, value)


class TestJsonFileStorage:

    def test_missing_key_returns_none(self, tmp_path):
        """Test reading a key that was never written."""
        storage = JsonFileStorage(tmp_path)
        assert storage.get("fintrack_bills") is None

    def test_set_get_round_trip(self, tmp_path):
        """Test values survive a new storage instance."""
        JsonFileStorage(tmp_path / "data").set("fintrack_bills", "[]")
        storage = JsonFileStorage(tmp_path / "data")
        assert storage.get("fintrack_bills") == "[]"
        assert storage.keys() == ["fintrack_bills"]
        assert (tmp_path / "data" / "fintrack_bills.json").exists()

    def test_write_leaves_no_temp_files(self, tmp_path):
        """Test that writes replace the target file atomically."""
        storage = JsonFileStorage(tmp_path)
        storage.set("k", "1")
        storage.set("k", "2")
        assert storage.get("k") == "2"
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    def test_delete(self, tmp_path):
        """Test deleting present and missing keys."""
        storage = JsonFileStorage(tmp_path)
        storage.set("k", "1")
        storage.delete("k")
        storage.delete("k")
        assert storage.get("k") is None

    def test_rejects_path_like_keys(self, tmp_path):
        """Test that keys cannot escape the data directory."""
        storage = JsonFileStorage(tmp_path)
        with pytest.raises(ValueError):
            storage.set("../escape", "x")
        with pytest.raises(StorageError):
            storage.get("my fintrack:bills")

    def test_keys_on_missing_directory(self, tmp_path):
        """Test listing keys before anything was written."""
        assert JsonFileStorage(tmp_path / "nope").keys() == []


class TestRecordStoreLoading:

    def test_empty_storage_loads_empty_collections(self):
        """Test that missing keys become empty collections."""
        store = RecordStore(InMemoryStorage())
        store.load()
        assert store.transactions == ()
        assert store.bills == ()
        assert store.budgets == ()
        assert store.investments == ()

    def test_corrupt_json_fails_open(self):
        """Test that malformed JSON becomes an empty collection."""
        storage = InMemoryStorage({
            "fintrack_transactions": "{not json",
            "fintrack_bills": json.dumps({"not": "a list"}),
        })
        store = RecordStore(storage)
        store.load()
        assert store.transactions == ()
        assert store.bills == ()

    def test_read_errors_fail_open(self):
        """Test that backend read errors never reach the caller."""
        store = RecordStore(BrokenStorage(fail_reads=True))
        store.load()
        assert store.transactions == ()

    def test_invalid_records_are_skipped(self):
        """Test that one bad record does not lose the others."""
        good = make_transaction().to_storage_dict()
        storage = InMemoryStorage({
            "fintrack_transactions": json.dumps([good, {"amount": "oops"}, 42]),
        })
        store = RecordStore(storage)
        store.load()
        assert len(store.transactions) == 1
        assert store.transactions[0].description == "Lunch"

    def test_duplicate_ids_are_skipped(self):
        """Test that ids stay unique within a collection."""
        record = make_transaction().to_storage_dict()
        storage = InMemoryStorage({"fintrack_transactions": json.dumps([record, record])})
        store = RecordStore(storage)
        store.load()
        assert len(store.transactions) == 1

    def test_invalid_key_prefix_fails_open(self, tmp_path):
        """Test that a prefix the backend rejects never raises."""
        store = RecordStore(JsonFileStorage(tmp_path), key_prefix="my fintrack:")
        store.load()
        assert store.transactions == ()
        assert store.replace(CollectionName.BILLS, ()) is False

    def test_deeply_nested_json_fails_open(self):
        """Test that JSON too deep to decode becomes an empty collection."""
        storage = InMemoryStorage({"fintrack_transactions": "[" * 100000 + "]" * 100000})
        store = RecordStore(storage)
        store.load()
        assert store.transactions == ()

    def test_long_text_fields_survive_load(self):
        """Test that stored records are not dropped for long free text."""
        record = make_transaction(description="d" * 800).to_storage_dict()
        record["category"] = "c" * 150
        storage = InMemoryStorage({"fintrack_transactions": json.dumps([record])})
        store = RecordStore(storage)
        store.load()
        assert len(store.transactions) == 1
        assert store.transactions[0].category == "c" * 150

    def test_loads_browser_format(self):
        """Test loading data written by the browser dashboard."""
        storage = InMemoryStorage({
            "fintrack_transactions": json.dumps([{
                "id": str(uuid4()),
                "date": "2024-01-02",
                "amount": 40,
                "category": "Food",
                "description": "Groceries",
                "type": "expense",
            }]),
            "fintrack_bills": json.dumps([{
                "id": str(uuid4()),
                "name": "Internet",
                "amount": 49.99,
                "dueDate": "2024-02-01",
                "category": "Utilities",
                "isPaid": True,
            }]),
            "fintrack_investments": json.dumps([{
                "id": str(uuid4()),
                "assetName": "Flat",
                "symbol": "",
                "quantity": 1,
                "purchasePrice": 100000,
                "currentPrice": 120000,
                "purchaseDate": "2020-06-01",
                "category": "Real Estate",
            }]),
        })
        store = RecordStore(storage)
        store.load()
        assert store.transactions[0].amount == Decimal("40")
        assert store.bills[0].is_paid is True
        assert store.bills[0].amount == Decimal("49.99")
        assert store.investments[0].asset_name == "Flat"


class TestRecordStoreSaving:

    def test_replace_persists_full_collection(self):
        """Test that a replaced collection is written under its key."""
        storage = InMemoryStorage()
        store = RecordStore(storage)
        first, second = make_transaction("a"), make_transaction("b")

        assert store.replace(CollectionName.TRANSACTIONS, (first, second)) is True

        saved = json.loads(storage.get("fintrack_transactions"))
        assert [item["description"] for item in saved] == ["a", "b"]
        assert storage.get("fintrack_bills") is None

    def test_round_trip_through_storage(self):
        """Test save then load gives equal collections."""
        storage = InMemoryStorage()
        store = RecordStore(storage)
        bill = Bill(name="Water", amount=Decimal("20"), due_date=date(2024, 3, 1))
        budget = Budget(category="Food", limit=Decimal("300"))
        inv = Investment(
            asset_name="Ether",
            symbol="ETH",
            quantity=Decimal("1.5"),
            purchase_price=Decimal("2000"),
            current_price=Decimal("2500"),
            purchase_date=date(2024, 1, 1),
            category="Crypto",
        )
        store.replace(CollectionName.BILLS, (bill,))
        store.replace(CollectionName.BUDGETS, (budget,))
        store.replace(CollectionName.INVESTMENTS, (inv,))

        reloaded = RecordStore(storage)
        reloaded.load()
        assert reloaded.bills == (bill,)
        assert reloaded.budgets == (budget,)
        assert reloaded.investments == (inv,)

    def test_write_failure_is_not_raised(self):
        """Test fire-and-forget writes keep the in-memory value."""
        store = RecordStore(BrokenStorage(fail_writes=True))
        record = make_transaction()
        assert store.replace(CollectionName.TRANSACTIONS, (record,)) is False
        assert store.transactions == (record,)

    def test_custom_key_prefix(self):
        """Test the configurable key prefix."""
        storage = InMemoryStorage()
        store = RecordStore(storage, key_prefix="test_")
        store.replace(CollectionName.BUDGETS, ())
        assert storage.keys() == ["test_budgets"]

    def test_save_to_json_files(self, tmp_path):
        """Test the record store on top of file storage."""
        store = RecordStore(JsonFileStorage(tmp_path))
        store.replace(CollectionName.TRANSACTIONS, (make_transaction(),))

        reloaded = RecordStore(JsonFileStorage(tmp_path))
        reloaded.load()
        assert reloaded.transactions == store.transactions


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

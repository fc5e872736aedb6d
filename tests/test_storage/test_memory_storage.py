"""Tests for in-memory storage."""

import asyncio

import pytest

from ledgerlens.errors import DependencyUnavailableError, NotFoundError
from ledgerlens.storage import InMemoryBlobStorage, InMemoryStorage


class TestInMemoryStorage:
    """Test cases for InMemoryStorage."""

    def setup_method(self):
        """Setup test fixtures."""
        self.storage = InMemoryStorage(
            {
                "items": [
                    {"id": "b", "owner": "x", "rank": 2},
                    {"id": "a", "owner": "x", "rank": 1},
                    {"id": "c", "owner": "y", "rank": 3},
                ]
            }
        )

    def test_select_filters_orders_and_limits(self):
        rows = asyncio.run(self.storage.select("items", {"owner": "x"}, order_by="rank"))
        assert [row["id"] for row in rows] == ["a", "b"]

        rows = asyncio.run(self.storage.select("items", order_by="rank", descending=True, limit=1))
        assert [row["id"] for row in rows] == ["c"]

    def test_unknown_table_is_empty(self):
        assert asyncio.run(self.storage.select("nothing")) == []

    def test_insert_assigns_id(self):
        stored = asyncio.run(self.storage.insert_one("items", {"owner": "z"}))

        assert stored["id"]
        assert stored["created_at"]
        assert self.storage.rows("items")[-1]["owner"] == "z"

    def test_returned_rows_are_copies(self):
        rows = asyncio.run(self.storage.select("items", {"id": "a"}))
        rows[0]["rank"] = 99

        assert self.storage.rows("items")[1]["rank"] == 1

    def test_update(self):
        updated = asyncio.run(self.storage.update("items", "a", {"rank": 10}))

        assert updated["rank"] == 10
        assert updated["owner"] == "x"

    def test_update_missing_row(self):
        with pytest.raises(NotFoundError):
            asyncio.run(self.storage.update("items", "zzz", {"rank": 10}))

    def test_failing_table(self):
        self.storage.fail_on.add("items")

        with pytest.raises(DependencyUnavailableError):
            asyncio.run(self.storage.insert("items", [{"owner": "q"}]))

        assert len(self.storage.rows("items")) == 3


class TestInMemoryBlobStorage:
    def test_download(self):
        blobs = InMemoryBlobStorage({"a/b.csv": b"amount\n1"})

        assert asyncio.run(blobs.download("a/b.csv")) == b"amount\n1"

    def test_missing_blob(self):
        with pytest.raises(NotFoundError):
            asyncio.run(InMemoryBlobStorage().download("nope"))

"""In-memory storage used for local runs and tests."""

import copy
import logging
from collections import defaultdict
from datetime import datetime, timezone
from uuid import uuid4

from ..errors import DependencyUnavailableError, NotFoundError
from .base import BlobStorage, Row, StorageService

logger = logging.getLogger(__name__)


class InMemoryStorage(StorageService):
    """
    Dictionary-backed structured storage.

    Rows are copied on the way in and out so callers never share state
    with the store. Tables listed in ``fail_on`` reject writes, which
    lets tests exercise partial persistence.
    """

    def __init__(self, tables: dict[str, list[Row]] | None = None):
        self._tables: dict[str, list[Row]] = defaultdict(list)
        for table, rows in (tables or {}).items():
            self._tables[table] = [copy.deepcopy(row) for row in rows]
        self.fail_on: set[str] = set()

    async def insert(self, table: str, rows: list[Row]) -> list[Row]:
        self._check_writable(table)
        stored = []
        for row in rows:
            record = {
                "id": str(uuid4()),
                "created_at": datetime.now(timezone.utc).isoformat(),
                **copy.deepcopy(row),
            }
            self._tables[table].append(record)
            stored.append(copy.deepcopy(record))
        logger.debug(f"Inserted {len(stored)} rows into {table}")
        return stored

    async def select(
        self,
        table: str,
        filters: Row | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        filters = filters or {}
        rows = [
            row for row in self._tables.get(table, [])
            if all(row.get(column) == value for column, value in filters.items())
        ]
        if order_by:
            rows.sort(
                key=lambda row: (row.get(order_by) is None, row.get(order_by)),
                reverse=descending,
            )
        if limit is not None:
            rows = rows[:limit]
        return [copy.deepcopy(row) for row in rows]

    async def update(self, table: str, row_id: str, values: Row) -> Row:
        self._check_writable(table)
        for row in self._tables.get(table, []):
            if row.get("id") == row_id:
                row.update(copy.deepcopy(values))
                return copy.deepcopy(row)
        raise NotFoundError(f"No row {row_id} in {table}")

    def rows(self, table: str) -> list[Row]:
        """Snapshot of a table, for inspection."""
        return [copy.deepcopy(row) for row in self._tables.get(table, [])]

    def _check_writable(self, table: str) -> None:
        if table in self.fail_on:
            raise DependencyUnavailableError(f"Storage write to {table} failed")


class InMemoryBlobStorage(BlobStorage):
    """Path -> bytes mapping."""

    def __init__(self, files: dict[str, bytes] | None = None):
        self._files = dict(files or {})

    def put(self, path: str, content: bytes) -> None:
        self._files[path] = content

    async def download(self, path: str) -> bytes:
        if path not in self._files:
            raise NotFoundError(f"No file stored at {path}")
        return self._files[path]

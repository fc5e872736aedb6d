"""Collaborator interfaces for structured and blob storage."""

from abc import ABC, abstractmethod
from typing import Any

Row = dict[str, Any]


class StorageService(ABC):
    """Row-oriented collection access.

    Callers scope rows by owner through equality filters
    (e.g. ``{"user_id": owner_id}``).
    """

    @abstractmethod
    async def insert(self, table: str, rows: list[Row]) -> list[Row]:
        """
        Insert rows into a collection.

        Returns:
            The stored rows, including generated ids
        """
        pass

    @abstractmethod
    async def select(
        self,
        table: str,
        filters: Row | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        """
        Select rows matching all equality filters.

        Args:
            table: Collection name
            filters: Column -> required value
            order_by: Optional column to sort on
            descending: Sort direction
            limit: Maximum number of rows

        Returns:
            Matching rows (possibly empty)
        """
        pass

    @abstractmethod
    async def update(self, table: str, row_id: str, values: Row) -> Row:
        """
        Update one row by id.

        Returns:
            The updated row

        Raises:
            NotFoundError: If no row has that id
        """
        pass

    async def insert_one(self, table: str, row: Row) -> Row:
        return (await self.insert(table, [row]))[0]


class BlobStorage(ABC):
    """Download-by-path access to uploaded files."""

    @abstractmethod
    async def download(self, path: str) -> bytes:
        """
        Download a file.

        Raises:
            NotFoundError: If nothing is stored at the path
        """
        pass

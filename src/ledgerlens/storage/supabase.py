"""Supabase storage over its PostgREST and Storage HTTP APIs."""

import logging
from typing import Any

import httpx

from ..errors import DependencyTimeoutError, DependencyUnavailableError, NotFoundError
from .base import BlobStorage, Row, StorageService

logger = logging.getLogger(__name__)


def _auth_headers(service_key: str) -> dict[str, str]:
    return {
        "apikey": service_key,
        "Authorization": f"Bearer {service_key}",
    }


async def _send(client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> httpx.Response:
    """Send a request, mapping transport problems to dependency errors."""
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.TimeoutException as e:
        logger.error(f"Supabase {method} {url} timed out")
        raise DependencyTimeoutError(f"Storage request {method} {url} timed out") from e
    except httpx.HTTPError as e:
        logger.error(f"Supabase {method} {url} failed: {e}")
        raise DependencyUnavailableError(f"Storage request {method} {url} failed: {e}") from e
    return response


def _raise_for_status(response: httpx.Response, operation: str) -> None:
    if response.is_error:
        detail = response.text[:200]
        logger.error(f"{operation} returned HTTP {response.status_code}: {detail}")
        raise DependencyUnavailableError(
            f"{operation} returned HTTP {response.status_code}: {detail}"
        )


class SupabaseStorage(StorageService):
    """Structured storage backed by Supabase PostgREST."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._client = client or httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={**_auth_headers(service_key), "Content-Type": "application/json"},
            timeout=timeout,
        )

    async def insert(self, table: str, rows: list[Row]) -> list[Row]:
        response = await _send(
            self._client,
            "POST",
            f"/{table}",
            json=rows,
            headers={"Prefer": "return=representation"},
        )
        _raise_for_status(response, f"Insert into {table}")
        return response.json()

    async def select(
        self,
        table: str,
        filters: Row | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        params = {"select": "*"}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)

        response = await _send(self._client, "GET", f"/{table}", params=params)
        _raise_for_status(response, f"Select from {table}")
        return response.json()

    async def update(self, table: str, row_id: str, values: Row) -> Row:
        response = await _send(
            self._client,
            "PATCH",
            f"/{table}",
            params={"id": f"eq.{row_id}"},
            json=values,
            headers={"Prefer": "return=representation"},
        )
        _raise_for_status(response, f"Update of {table}")
        rows = response.json()
        if not rows:
            raise NotFoundError(f"No row {row_id} in {table}")
        return rows[0]

    async def aclose(self) -> None:
        await self._client.aclose()


class SupabaseBlobStorage(BlobStorage):
    """Blob storage backed by a Supabase Storage bucket."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        bucket: str = "documents",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.bucket = bucket
        self._client = client or httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/storage/v1",
            headers=_auth_headers(service_key),
            timeout=timeout,
        )

    async def download(self, path: str) -> bytes:
        url = f"/object/{self.bucket}/{path.lstrip('/')}"
        response = await _send(self._client, "GET", url)
        if response.status_code == 404:
            raise NotFoundError(f"No file stored at {path}")
        _raise_for_status(response, f"Download of {path}")
        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()

"""Pytest configuration and fixtures."""

import asyncio

import pytest

from ledgerlens.config import RuntimeConfig
from ledgerlens.core.models import AuditData, TaxCategory
from ledgerlens.storage import InMemoryBlobStorage, InMemoryStorage

OWNER_ID = "owner-1"


@pytest.fixture
def settings() -> RuntimeConfig:
    """Settings that never reach external services."""
    return RuntimeConfig(
        _env_file=None,
        supabase_url="",
        supabase_service_role_key="",
        openai_api_key="",
    )


@pytest.fixture
def tax_codes() -> list[dict]:
    """One tax code per expense category."""
    return [
        {
            "id": f"tc-{category.name.lower()}",
            "code": f"TC-{index:02d}",
            "expense_category": category.value,
        }
        for index, category in enumerate(TaxCategory, start=1)
    ]


@pytest.fixture
def storage(tax_codes) -> InMemoryStorage:
    return InMemoryStorage({"tax_codes": tax_codes})


@pytest.fixture
def blob_storage() -> InMemoryBlobStorage:
    return InMemoryBlobStorage()


@pytest.fixture
def add_document(storage, blob_storage):
    """Register an uploaded document and its content; returns the document id."""

    def _add(
        filename: str,
        content: bytes,
        document_id: str = "doc-1",
        owner_id: str = OWNER_ID,
        storage_path: str | None = "default",
    ) -> str:
        path = f"{owner_id}/{filename}" if storage_path == "default" else storage_path
        row = {
            "id": document_id,
            "user_id": owner_id,
            "original_filename": filename,
            "storage_path": path,
            "processing_status": "uploaded",
        }
        asyncio.run(storage.insert("processed_documents", [row]))
        if path:
            blob_storage.put(path, content)
        return document_id

    return _add


def make_audit(items: list[dict], audit_id: str = "audit-1") -> AuditData:
    """Build audit data from item dicts; ids are assigned in order."""
    return AuditData.model_validate(
        {
            "id": audit_id,
            "user_id": OWNER_ID,
            "title": "Year-end audit",
            "audit_items": [
                {"id": f"item-{index}", "audit_id": audit_id, **item}
                for index, item in enumerate(items)
            ],
        }
    )


@pytest.fixture
def audit_factory():
    return make_audit

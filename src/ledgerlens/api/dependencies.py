"""FastAPI dependencies resolving settings and collaborators."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from ..audit import AutomatedAuditService
from ..config import RuntimeConfig, get_settings
from ..core.pipeline import DocumentAnalysisPipeline
from ..errors import ValidationFailureError
from ..inference import OpenAIInferenceClient, TextInferenceClient
from ..storage import (
    BlobStorage,
    InMemoryBlobStorage,
    InMemoryStorage,
    StorageService,
    SupabaseBlobStorage,
    SupabaseStorage,
)

logger = logging.getLogger(__name__)


@lru_cache
def _supabase_storage() -> SupabaseStorage:
    settings = get_settings()
    return SupabaseStorage(
        settings.supabase_url,
        settings.supabase_service_role_key,
        timeout=settings.storage_timeout_seconds,
    )


@lru_cache
def _supabase_blob_storage() -> SupabaseBlobStorage:
    settings = get_settings()
    return SupabaseBlobStorage(
        settings.supabase_url,
        settings.supabase_service_role_key,
        bucket=settings.documents_bucket,
        timeout=settings.storage_timeout_seconds,
    )


@lru_cache
def _local_storage() -> InMemoryStorage:
    logger.warning("Supabase is not configured, using in-memory storage")
    return InMemoryStorage()


@lru_cache
def _local_blob_storage() -> InMemoryBlobStorage:
    return InMemoryBlobStorage()


@lru_cache
def _openai_client() -> OpenAIInferenceClient:
    settings = get_settings()
    return OpenAIInferenceClient(
        api_key=settings.openai_api_key,
        model=settings.llm_model,
        timeout=settings.inference_timeout_seconds,
    )


def get_runtime_config() -> RuntimeConfig:
    return get_settings()


def get_storage(settings: Annotated[RuntimeConfig, Depends(get_runtime_config)]) -> StorageService:
    if settings.storage_configured:
        return _supabase_storage()
    return _local_storage()


def get_blob_storage(settings: Annotated[RuntimeConfig, Depends(get_runtime_config)]) -> BlobStorage:
    if settings.storage_configured:
        return _supabase_blob_storage()
    return _local_blob_storage()


def get_inference_client(
    settings: Annotated[RuntimeConfig, Depends(get_runtime_config)],
) -> TextInferenceClient | None:
    if settings.inference_configured:
        return _openai_client()
    return None


def get_owner_id(x_user_id: Annotated[str | None, Header()] = None) -> str:
    """Owner identity set by the authentication layer in front of the API."""
    if not x_user_id:
        raise ValidationFailureError("X-User-Id header is required")
    return x_user_id


def get_document_pipeline(
    settings: Annotated[RuntimeConfig, Depends(get_runtime_config)],
    storage: Annotated[StorageService, Depends(get_storage)],
    blob_storage: Annotated[BlobStorage, Depends(get_blob_storage)],
    inference_client: Annotated[TextInferenceClient | None, Depends(get_inference_client)],
) -> DocumentAnalysisPipeline:
    return DocumentAnalysisPipeline(
        settings=settings,
        storage=storage,
        blob_storage=blob_storage,
        inference_client=inference_client,
    )


def get_audit_service(
    settings: Annotated[RuntimeConfig, Depends(get_runtime_config)],
    storage: Annotated[StorageService, Depends(get_storage)],
) -> AutomatedAuditService:
    return AutomatedAuditService(settings=settings, storage=storage)


async def close_collaborators() -> None:
    """Close HTTP clients of collaborators created so far."""
    if _supabase_storage.cache_info().currsize:
        await _supabase_storage().aclose()
    if _supabase_blob_storage.cache_info().currsize:
        await _supabase_blob_storage().aclose()
    if _openai_client.cache_info().currsize:
        await _openai_client().aclose()
    _supabase_storage.cache_clear()
    _supabase_blob_storage.cache_clear()
    _openai_client.cache_clear()

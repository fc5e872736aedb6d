"""Liveness and readiness endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from ... import __version__
from ...config import RuntimeConfig
from ...errors import LedgerLensError, with_timeout
from ...storage import StorageService
from ..dependencies import get_runtime_config, get_storage

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    return {
        "status": "healthy",
        "version": __version__,
        "service": "ledgerlens",
    }


@router.get("/ready")
async def readiness_check(
    settings: Annotated[RuntimeConfig, Depends(get_runtime_config)],
    storage: Annotated[StorageService, Depends(get_storage)],
) -> dict:
    """
    Probe structured storage with a one-row read of the tax taxonomy.

    Inference is optional, so it is reported but never blocks readiness.
    """
    try:
        await with_timeout(
            storage.select("tax_codes", limit=1),
            settings.storage_timeout_seconds,
            "readiness probe",
        )
        storage_ok = True
    except LedgerLensError as e:
        logger.warning(f"Readiness probe failed: {e}")
        storage_ok = False

    return {
        "ready": storage_ok,
        "checks": {
            "storage": storage_ok,
            "supabase": settings.storage_configured,
            "inference": settings.inference_configured,
        },
    }

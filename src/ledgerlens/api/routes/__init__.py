"""API routes."""

from .audits import router as audits_router
from .documents import router as documents_router
from .exports import router as exports_router
from .health import router as health_router

__all__ = ["audits_router", "documents_router", "exports_router", "health_router"]

"""Error handling middleware."""

import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...errors import LedgerLensError, ValidationFailureError

logger = logging.getLogger(__name__)


async def error_handler_middleware(
    request: Request,
    call_next: Callable,
) -> Response:
    """
    Global error handler middleware.

    Catches unhandled exceptions and returns proper JSON error responses.
    """
    try:
        return await call_next(request)
    except Exception as e:
        logger.exception(f"Unhandled error processing {request.method} {request.url.path}")

        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "detail": str(e) if logger.isEnabledFor(logging.DEBUG) else "An unexpected error occurred",
            },
        )


def setup_error_handlers(app: FastAPI) -> None:
    """Setup exception handlers for the FastAPI app."""

    @app.exception_handler(LedgerLensError)
    async def ledgerlens_error_handler(request: Request, exc: LedgerLensError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.kind}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.kind, "detail": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=ValidationFailureError.status_code,
            content={"error": ValidationFailureError.kind, "detail": jsonable_encoder(exc.errors())},
        )

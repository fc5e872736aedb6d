"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.dependencies import close_collaborators
from .api.middleware import error_handler_middleware, setup_error_handlers
from .api.routes import audits_router, documents_router, exports_router, health_router
from .config import RuntimeConfig, get_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _log_configuration(settings: RuntimeConfig) -> None:
    if settings.storage_configured:
        logger.info(f"Storage: Supabase at {settings.supabase_url}, bucket {settings.documents_bucket}")
    else:
        logger.warning("SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not set, storage is in-memory")

    if settings.inference_configured:
        logger.info(f"Advice inference: {settings.llm_model}")
    else:
        logger.info("OPENAI_API_KEY not set, advice insights are disabled")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"LedgerLens API {__version__} starting up...")
    yield
    await close_collaborators()
    logger.info("LedgerLens API shut down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    _log_configuration(settings)

    app = FastAPI(
        title="LedgerLens API",
        description=(
            "Bookkeeping backend for small businesses. Turns uploaded financial "
            "documents into write-offs, revenue and balance-sheet records, and "
            "scores audits for risk, control effectiveness and anomalies."
        ),
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.middleware("http")(error_handler_middleware)
    setup_error_handlers(app)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(audits_router, prefix="/api/v1")
    app.include_router(exports_router, prefix="/api/v1/exports")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ledgerlens.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

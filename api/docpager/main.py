"""Main FastAPI application for docpager."""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI

from . import __version__
from .config import get_settings
from .errors import register_exception_handlers, PagerError
from .errors.problem_details import ServiceUnavailableError
from .middleware.request_logging import RequestLoggingMiddleware
from .routes import documents_router
from .store import store_manager


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "docpager"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting docpager API")
    settings = get_settings()

    # Configure logging level from settings
    logging.getLogger().setLevel(getattr(logging, settings.log_level))

    try:
        await store_manager.initialize(settings)
        logger.info("Document store connection verified")
    except PagerError as e:
        logger.error(f"Failed to connect to document store: {e}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down docpager API")
    await store_manager.close()
    logger.info("Document store connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="docpager API",
        description="Cursor-based pagination over a MongoDB collection",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(RequestLoggingMiddleware, path_prefix="/v1/documents")

    register_exception_handlers(app)

    app.include_router(documents_router, prefix="/v1")

    @app.get("/health", tags=["Health"])
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint with document store connectivity test."""
        try:
            await store_manager.get_store().ping()
        except (PagerError, RuntimeError) as e:
            logger.error(f"Health check failed: {e}")
            raise ServiceUnavailableError(
                detail="Document store connection failed",
                database_error=str(e)
            )

        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": __version__,
            "database": "connected"
        }

    @app.get("/ready", tags=["Health"])
    async def ready_check() -> Dict[str, Any]:
        """Readiness check endpoint."""
        settings = get_settings()
        if store_manager.store is None:
            raise ServiceUnavailableError(detail="Service not ready")

        return {
            "status": "ready",
            "service": SERVICE_NAME,
            "database": settings.mongodb_database,
            "collection": settings.mongodb_collection
        }

    @app.get("/live", tags=["Health"])
    async def liveness_check() -> Dict[str, str]:
        """Liveness check endpoint."""
        return {
            "status": "alive",
            "service": SERVICE_NAME
        }

    @app.get("/", tags=["Root"])
    async def root() -> Dict[str, str]:
        """Root endpoint with API information."""
        return {
            "service": SERVICE_NAME,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "documents": "/v1/documents"
        }

    return app


# Create the application instance
app = create_app()


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn
    settings = get_settings()

    uvicorn.run(
        "docpager.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run()

"""
Crisis Search HTTP API

FastAPI application exposing filter extraction and resource search.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from crisis_search import __version__
from crisis_search.config import get_settings
from crisis_search.router import extraction_router, resources_router

logger = logging.getLogger(__name__)

SERVICE_NAME = "crisis-search"


def create_app(settings=None) -> FastAPI:
    """Create and configure the HTTP application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Crisis Search API starting up...")
        logger.info(f"Backend URL: {settings.backend.base_url}")
        logger.info(f"Extraction providers: {settings.extraction.provider_order}")
        # One pooled client shared by providers and the backend client
        async with httpx.AsyncClient(timeout=settings.backend.timeout_ms / 1000) as client:
            app.state.http_client = client
            yield
        app.state.http_client = None
        logger.info("Crisis Search API shutting down...")

    app = FastAPI(
        title="Crisis Search",
        description="Natural-language filter extraction and mental-health resource search",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.http_client = None

    app.include_router(extraction_router)
    app.include_router(resources_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
        }

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are input errors."""
        logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "details": str(exc) if settings.http.debug else "An error occurred",
            },
        )

    return app

"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, ocrchat.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ocrchat.api.deps.dependencies import get_service_cache
from ocrchat.boundary.db import create_tables, dispose_engine
from ocrchat.configs import get_settings
from ocrchat.observability import configure_logging
from ocrchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import chat_router, documents_router, health_router, ocr_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: configure logging, ensure tables, pre-warm local collaborators.
    Shutdown: tear down the service cache and dispose the engine.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    await create_tables()

    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.text_extractor
    _ = cache.renderer
    _ = cache.blob_store
    logger.info("Service cache pre-warmed")

    yield

    await cache.aclose()
    await dispose_engine()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="OCR Document Chat API",
        description="Upload a document, extract its text and chat about it",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(ocr_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "ocrchat.api.main:app",
        host="0.0.0.0",
        port=8000,
    )

"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads both reference catalogs once
  - CORS middleware
  - Global exception handlers (KeyError → 404, ValueError → 400)
  - All API routes mounted under ``/api/v1``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``clinref-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinref_catalog.reference import ReferenceData

from clinref_server.config import ServerSettings, load_settings
from clinref_server.errors import (
    generic_error_handler,
    key_error_handler,
    value_error_handler,
)
from clinref_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan: runs once at startup
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load both catalogs and stash the handle on ``app.state``.

    Loading never fails: an unreachable or corrupt source degrades to the
    embedded fallback, which ``/health`` and ``/api/v1/status`` report.
    """
    settings: ServerSettings = app.state.settings

    reference = ReferenceData.from_settings(settings.loader)
    await reference.initialize()
    app.state.reference = reference
    logger.info("Reference catalogs ready")

    yield


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Clinical Reference API",
        description="Read-only ICD-10 code lookup and drug interaction checks",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings so the lifespan handler can read them
    app.state.settings = settings

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api/v1 prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — "degraded" while any catalog runs on fallback data."""
        statuses = app.state.reference.status()
        degraded = [name for name, s in statuses.items() if s.using_fallback]
        return {
            "status": "degraded" if degraded else "ok",
            "fallback_catalogs": degraded,
        }

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn clinref_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``clinref-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "clinref_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )

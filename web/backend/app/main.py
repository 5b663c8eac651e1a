"""FastAPI application for the propreg property registry.

Provides REST API endpoints wrapping the propreg package for:
- Uploading a property with its image (only the image digest is kept)
- Listing all registered properties
- Fetching a single property by id
- Deleting a property
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from propreg import __version__
from propreg.config import Settings, configure_logging
from propreg.registry.memory_registry import PropertyRegistry
from propreg.utils.manifest import load_manifest, seed_registry
from web.backend.app.dependencies import get_registry
from web.backend.app.models.api import HealthResponse
from web.backend.app.routers import properties

logger = logging.getLogger(__name__)


def create_app(
    registry: Optional[PropertyRegistry] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the application around a single registry instance.

    The registry is created here (or supplied by the caller) and lives for
    as long as the app does. If ``settings.seed_manifest`` is set, the
    manifest is loaded into the registry during startup.
    """
    settings = settings or Settings.from_env()
    registry = registry if registry is not None else PropertyRegistry()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.seed_manifest:
            entries = load_manifest(settings.seed_manifest)
            seed_registry(app.state.registry, entries)
        logger.info(
            "propreg %s ready with %d properties", __version__, len(app.state.registry)
        )
        yield

    app = FastAPI(
        title="propreg API",
        description=(
            "REST API for the property image registry. "
            "Associates property records with the SHA-256 digest of an image."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.settings = settings

    # -----------------------------------------------------------------------
    # CORS middleware (allow all origins for development)
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(properties.router)

    # -----------------------------------------------------------------------
    # Root and health-check endpoints
    # -----------------------------------------------------------------------

    @app.get("/", tags=["meta"])
    async def root():
        """Return basic API information."""
        return {
            "name": "propreg API",
            "version": __version__,
            "description": "Property image registry REST API",
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    @app.get("/health", response_model=HealthResponse, tags=["meta"])
    async def health_check(reg: PropertyRegistry = Depends(get_registry)):
        """Health check endpoint."""
        return HealthResponse(status="healthy", properties=len(reg))

    return app


def _app_from_env() -> FastAPI:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return create_app(settings=settings)


app = _app_from_env()

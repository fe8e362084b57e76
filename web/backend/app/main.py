"""FastAPI application for the SkillShare web portal.

Provides REST API endpoints wrapping the SkillShare controller for:
- Browsing, searching and filtering shared skills
- Category statistics
- Publishing and rating skills through the transaction lifecycle
- Wallet session and recent activity
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillshare import __version__
from skillshare.config import SkillShareConfig, load_config
from skillshare.controller import SkillShareController
from skillshare.store.file_store import FileStore

from web.backend.app.routers import skills


def create_app(controller: SkillShareController | None = None) -> FastAPI:
    """Build the API around ``controller`` (a file-backed one by default)."""
    if controller is None:
        config: SkillShareConfig = load_config()
        controller = SkillShareController(FileStore(config.store_dir), config=config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await controller.load_all()
        yield

    app = FastAPI(
        title="SkillShare API",
        description=(
            "REST API for anonymous peer-to-peer skill sharing. "
            "Provides endpoints for browsing, statistics, publishing and rating."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.controller = controller

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

    app.include_router(skills.router)

    @app.get("/", tags=["meta"])
    async def root():
        """Return basic API information."""
        return {
            "name": "SkillShare API",
            "version": __version__,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    @app.get("/health", tags=["meta"])
    async def health_check():
        """Health check endpoint."""
        available = await controller.store.is_available()
        return {"status": "healthy" if available else "degraded"}

    return app

"""Main FastAPI application"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import movies, search, system, trending
from .config import Settings, get_settings
from .exceptions import ConfigurationError
from .services.log_service import log_service
from .services.tmdb_service import TMDBService
from .services.trending_service import TrendingService

VERSION = "1.0.0"


def _build_client(cls, settings: Settings):
    try:
        return cls(settings)
    except ConfigurationError as e:
        log_service.error(f"{cls.__name__} disabled: {e}")
        return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the upstream clients once, close them on shutdown"""
    settings: Settings = app.state.settings
    log_service.configure(settings.LOGS_DIR)

    app.state.tmdb = _build_client(TMDBService, settings)
    app.state.trending = _build_client(TrendingService, settings)
    log_service.info("ReelScout API started")
    try:
        yield
    except asyncio.CancelledError:
        pass  # Suppress CancelledError during shutdown
    finally:
        for client in (app.state.tmdb, app.state.trending):
            if client is not None:
                await client.close()
        log_service.info("ReelScout API stopped")


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="ReelScout",
        description="Movie search, infinite scroll and trending searches",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # If ALLOWED_ORIGINS is not set, default to ["*"]
    allowed_origins = ["*"]
    allow_credentials = False  # Credentials cannot be used with "*"

    if settings.ALLOWED_ORIGINS:
        allowed_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",")]
        allow_credentials = True

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(movies.router)
    app.include_router(search.router)
    app.include_router(trending.router)
    app.include_router(system.router)

    @app.get("/api")
    async def api_root():
        """API root"""
        return {
            "name": "ReelScout API",
            "version": VERSION,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app

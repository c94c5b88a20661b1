"""Component library query API — FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from component_library.api.errors import register_error_handlers
from component_library.api.middleware.request_id import RequestIDMiddleware
from component_library.api.routers import components, info, raw, utils
from component_library.core.config import Settings
from component_library.core.database import Database
from component_library.core.logging import setup_logging
from component_library.engines.ingestion.models import format_timestamp

log = structlog.get_logger("component_library.api")


def create_app(database: Database | None = None, settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    When *database* is omitted the app opens its own handle from *settings*
    (or the environment) and disposes it on shutdown. A handle passed in is
    left for the caller to dispose.
    """
    if not structlog.is_configured():
        setup_logging()
    owns_database = database is None
    if database is None:
        settings = settings or Settings.from_env()
        database = Database(settings.database_url)

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        log.info("api.startup", database_connected=await database.ping())
        yield
        if owns_database:
            await database.dispose()

    app = FastAPI(title="Component Library", lifespan=_lifespan)
    app.state.database = database

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        connected = await database.ping()
        return JSONResponse(
            {
                "status": "ok",
                "timestamp": format_timestamp(datetime.now(timezone.utc)),
                "database": "connected" if connected else "disconnected",
            }
        )

    app.include_router(info.router, prefix="/api", tags=["info"])
    app.include_router(components.router, prefix="/api/components", tags=["components"])
    app.include_router(utils.router, prefix="/api/utils", tags=["utils"])
    app.include_router(raw.router, prefix="/api/raw", tags=["raw"])

    return app

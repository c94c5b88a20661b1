"""Dependency injection — store handle, per-request session, service singletons."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from component_library.core.database import Database
from component_library.dao.document_dao import ComponentDAO, UtilDAO
from component_library.dao.metadata_dao import MetadataDAO
from component_library.services.component_service import ComponentService

# ---------------------------------------------------------------------------
# Stateless DAO / service singletons
# ---------------------------------------------------------------------------
_component_dao = ComponentDAO()
_util_dao = UtilDAO()
_metadata_dao = MetadataDAO()

_component_service = ComponentService(_component_dao, _util_dao, _metadata_dao)


# ---------------------------------------------------------------------------
# Store handle (owned by the app, set by create_app)
# ---------------------------------------------------------------------------


def get_database(request: Request) -> Database:
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("create_app() must be given a Database before handling requests")
    return database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a per-request read session."""
    database = get_database(request)
    async with database.session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Service getters (for Depends())
# ---------------------------------------------------------------------------


def get_component_service() -> ComponentService:
    return _component_service

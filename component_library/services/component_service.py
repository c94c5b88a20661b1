"""ComponentService — read-only queries behind the HTTP API."""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from component_library.dao.document_dao import ComponentDAO, UtilDAO
from component_library.dao.metadata_dao import MetadataDAO
from component_library.models.document import DocumentMixin
from component_library.services import NotFoundError, StoreError

_Handler = Callable[..., Awaitable[Any]]

CONTENT_TYPES = {
    "js": "application/javascript",
    "jsx": "application/javascript",
    "ts": "application/typescript",
    "tsx": "application/typescript",
    "css": "text/css",
    "json": "application/json",
    "md": "text/markdown",
}


def content_type_for(filename: str) -> str:
    """Media type chosen from the file extension (``text/plain`` if unknown)."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return CONTENT_TYPES.get(ext, "text/plain")


def _store_errors(message: str) -> Callable[[_Handler], _Handler]:
    """Turn SQLAlchemy failures into :class:`StoreError` carrying *message*."""

    def decorator(fn: _Handler) -> _Handler:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await fn(*args, **kwargs)
            except SQLAlchemyError as exc:
                raise StoreError(message, details=str(exc)) from exc

        return wrapper

    return decorator


def _filenames(files: dict[str, list[dict[str, Any]]] | None) -> dict[str, list[str]]:
    return {lang: [f["filename"] for f in entries] for lang, entries in (files or {}).items()}


def _summary(component: DocumentMixin) -> dict[str, Any]:
    return {
        "id": component.id,
        "name": component.name,
        "path": component.path,
        "dependencies": list(component.dependencies or []),
        "utils": component.utils,
    }


def _language_files(doc: DocumentMixin, language: str) -> list[dict[str, Any]]:
    files = (doc.files or {}).get(language)
    if files is None:
        raise NotFoundError("Language not found")
    return files


def _find_file(doc: DocumentMixin, language: str, filename: str) -> dict[str, Any]:
    for f in _language_files(doc, language):
        if f["filename"] == filename:
            return f
    raise NotFoundError("File not found")


class ComponentService:
    """Stateless query service over components, utils and metadata."""

    def __init__(
        self,
        component_dao: ComponentDAO,
        util_dao: UtilDAO,
        metadata_dao: MetadataDAO,
    ) -> None:
        self._component_dao = component_dao
        self._util_dao = util_dao
        self._metadata_dao = metadata_dao

    @_store_errors("Failed to fetch metadata")
    async def info(self, session: AsyncSession) -> dict[str, Any]:
        """Metadata row plus live table counts."""
        meta = await self._metadata_dao.get(session)
        metadata = meta.to_dict() if meta is not None else {}
        return {
            "metadata": metadata,
            "statistics": {
                "components": await self._component_dao.count(session),
                "utils": await self._util_dao.count(session),
                "lastUpdated": metadata.get("lastUpdated"),
                "databaseUpdatedAt": metadata.get("databaseUpdatedAt"),
            },
        }

    @_store_errors("Failed to fetch components")
    async def list_all(self, session: AsyncSession) -> dict[str, Any]:
        """All components and utils with files collapsed to filename lists."""
        components = await self._component_dao.list_all(session)
        utils = await self._util_dao.list_all(session)
        return {
            "components": [
                {**_summary(c), "files": _filenames(c.files)} for c in components
            ],
            "utils": [
                {
                    "id": u.id,
                    "name": u.name,
                    "path": u.path,
                    "dependencies": list(u.dependencies or []),
                    "files": _filenames(u.files),
                }
                for u in utils
            ],
        }

    @_store_errors("Failed to fetch component")
    async def get_component(self, session: AsyncSession, component_id: str) -> dict[str, Any]:
        """Raises :class:`NotFoundError` if the component does not exist."""
        return (await self._component(session, component_id)).to_dict()

    @_store_errors("Failed to fetch component files")
    async def component_files(
        self, session: AsyncSession, component_id: str, language: str
    ) -> dict[str, Any]:
        component = await self._component(session, component_id)
        return {
            "component": component_id,
            "language": language,
            "files": _language_files(component, language),
        }

    @_store_errors("Failed to fetch file")
    async def component_file(
        self, session: AsyncSession, component_id: str, language: str, filename: str
    ) -> dict[str, Any]:
        """One stored file record; raises :class:`NotFoundError` at the first missing level."""
        component = await self._component(session, component_id)
        return _find_file(component, language, filename)

    @_store_errors("Failed to fetch utility file")
    async def util_file(
        self, session: AsyncSession, util_id: str, language: str, filename: str
    ) -> dict[str, Any]:
        util = await self._util_dao.get_by_id(session, util_id)
        if util is None:
            raise NotFoundError("Utility not found")
        return _find_file(util, language, filename)

    @_store_errors("Failed to fetch bulk components")
    async def bulk(self, session: AsyncSession, language: str) -> dict[str, Any]:
        """``id -> {info, files}`` for every component that has *language*."""
        result: dict[str, Any] = {}
        for component in await self._component_dao.list_all(session):
            files = (component.files or {}).get(language)
            if files is None:
                continue
            result[component.id] = {"info": _summary(component), "files": files}
        return result

    @_store_errors("Failed to search components")
    async def search(
        self,
        session: AsyncSession,
        *,
        q: str | None = None,
        dependency: str | None = None,
    ) -> list[dict[str, Any]]:
        rows = await self._component_dao.search(session, q=q, dependency=dependency)
        return [_summary(c) for c in rows]

    @_store_errors("Failed to fetch languages")
    async def languages(self, session: AsyncSession, component_id: str) -> dict[str, Any]:
        component = await self._component(session, component_id)
        files = component.files or {}
        return {
            "component": component_id,
            "languages": list(files),
            "filesPerLanguage": {lang: len(entries) for lang, entries in files.items()},
        }

    # ── internal ───────────────────────────────────────────────────────────

    async def _component(self, session: AsyncSession, component_id: str) -> DocumentMixin:
        component = await self._component_dao.get_by_id(session, component_id)
        if component is None:
            raise NotFoundError("Component not found")
        return component

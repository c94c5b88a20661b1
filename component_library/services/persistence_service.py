"""PersistenceService — full-replace of the document tables from an assembled run."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from component_library.dao.document_dao import (
    ComponentDAO,
    DocumentDAO,
    StaticFileDAO,
    UtilDAO,
)
from component_library.dao.metadata_dao import MetadataDAO
from component_library.engines.ingestion.models import (
    AssembledData,
    EntryDocument,
    MetadataDocument,
)

log = structlog.get_logger("component_library.persistence")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PersistenceService:
    """Writes an :class:`AssembledData` tree into the store.

    Each table is replaced in its own transaction (delete, then insert), in
    the order components → utils → static_files, followed by the metadata
    upsert. There is no transaction spanning tables: if a later step fails,
    earlier tables keep their new contents and the caller must treat the
    whole run as failed and re-run it.

    *ensure_schema*, when given, is awaited before any write so a fresh
    database gets its tables and indexes first.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        component_dao: ComponentDAO | None = None,
        util_dao: UtilDAO | None = None,
        static_dao: StaticFileDAO | None = None,
        metadata_dao: MetadataDAO | None = None,
        now: Callable[[], datetime] = _utcnow,
        ensure_schema: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._component_dao = component_dao or ComponentDAO()
        self._util_dao = util_dao or UtilDAO()
        self._static_dao = static_dao or StaticFileDAO()
        self._metadata_dao = metadata_dao or MetadataDAO()
        self._now = now
        self._ensure_schema = ensure_schema

    async def apply(self, data: AssembledData) -> dict[str, int]:
        """Replace all tables with *data*; return per-table inserted counts."""
        await self._prepare()
        components_count = await self._replace(
            "components", self._component_dao, list(data.components.values())
        )
        utils_count = await self._replace("utils", self._util_dao, list(data.utils.values()))
        static_count = await self._replace(
            "static_files", self._static_dao, list(data.static.values())
        )
        await self._update_metadata(data.metadata)
        return {
            "componentsCount": components_count,
            "utilsCount": utils_count,
            "staticCount": static_count,
        }

    async def collection_counts(self) -> dict[str, int]:
        """Row counts per table plus the number of stored component files."""
        async with self._session_factory() as session:
            components = await self._component_dao.list_all(session)
            return {
                "components": len(components),
                "utils": await self._util_dao.count(session),
                "static": await self._static_dao.count(session),
                "totalFiles": sum(
                    len(files) for c in components for files in (c.files or {}).values()
                ),
            }

    async def clear_all(self) -> None:
        """Delete every document and the metadata row in one transaction."""
        await self._prepare()
        async with self._session_factory() as session:
            async with session.begin():
                for dao in (
                    self._component_dao,
                    self._util_dao,
                    self._static_dao,
                    self._metadata_dao,
                ):
                    await dao.delete_all(session)
        log.info("persistence.cleared")

    async def export_snapshot(self) -> AssembledData:
        """Read the store back into an :class:`AssembledData` (for backups)."""
        async with self._session_factory() as session:
            components = await self._component_dao.list_all(session)
            utils = await self._util_dao.list_all(session)
            static = await self._static_dao.list_all(session)
            meta = await self._metadata_dao.get(session)

        if meta is not None and meta.last_updated is not None:
            metadata = MetadataDocument(
                last_updated=meta.last_updated,
                total_components=meta.total_components,
                total_utils=meta.total_utils,
                github_repo=meta.github_repo or "",
                database_updated_at=meta.database_updated_at,
            )
        else:
            metadata = MetadataDocument(
                last_updated=self._now(),
                total_components=len(components),
                total_utils=len(utils),
                github_repo="",
            )

        def _docs(rows) -> dict[str, EntryDocument]:
            return {row.id: EntryDocument.from_dict(row.to_dict()) for row in rows}

        return AssembledData(
            components=_docs(components),
            utils=_docs(utils),
            static=_docs(static),
            metadata=metadata,
        )

    # ── internal ───────────────────────────────────────────────────────────

    async def _prepare(self) -> None:
        if self._ensure_schema is not None:
            await self._ensure_schema()

    async def _replace(self, table: str, dao: DocumentDAO, docs: list[EntryDocument]) -> int:
        log.info("persistence.replace_start", table=table, documents=len(docs))
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    inserted = await dao.replace_all(session, docs)
        except Exception:
            log.exception("persistence.replace_failed", table=table)
            raise
        log.info("persistence.replaced", table=table, inserted=inserted)
        return inserted

    async def _update_metadata(self, metadata: MetadataDocument) -> None:
        # never earlier than the fetch start, even with a skewed clock
        updated_at = max(self._now(), metadata.last_updated)
        async with self._session_factory() as session:
            async with session.begin():
                await self._metadata_dao.upsert(
                    session, metadata, database_updated_at=updated_at
                )
        log.info("persistence.metadata_updated", database_updated_at=updated_at.isoformat())

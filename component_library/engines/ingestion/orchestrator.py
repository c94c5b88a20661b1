"""Ingestor — walks the catalog, fetches every file, assembles the document tree."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Protocol

import structlog

from component_library.catalog import Catalog, CatalogEntry
from component_library.core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_GITHUB_REPO,
    DEFAULT_REQUEST_DELAY,
)
from component_library.core.github import COMPONENTS_SEGMENT, UTILS_SEGMENT, raw_file_url
from component_library.engines.ingestion.fetcher import DEFAULT_MAX_RETRIES
from component_library.engines.ingestion.models import (
    AssembledData,
    EntryDocument,
    FetchedFile,
    MetadataDocument,
)
from component_library.engines.ingestion.pacing import FixedIntervalPacer

log = structlog.get_logger("component_library.ingestion")


class Fetcher(Protocol):
    async def fetch(self, url: str, max_retries: int = ...) -> str | None: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ingestor:
    """Sequential fetch-and-assemble pass over a :class:`Catalog`.

    Files are fetched one at a time in catalog order (components, then
    utilities; entries, languages and filenames as declared). Every
    declared file produces exactly one :class:`FetchedFile`, successful or
    not. Per-file failures never abort the run.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        base_url: str = DEFAULT_BASE_URL,
        github_repo: str = DEFAULT_GITHUB_REPO,
        pacer: FixedIntervalPacer | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")
        self._github_repo = github_repo
        self._pacer = pacer or FixedIntervalPacer(DEFAULT_REQUEST_DELAY)
        self._max_retries = max_retries
        self._now = now

    def file_url(self, entry: CatalogEntry, language: str, filename: str) -> str:
        segment = COMPONENTS_SEGMENT if entry.kind == "component" else UTILS_SEGMENT
        return raw_file_url(self._base_url, language, segment, entry.path, filename)

    async def run(self, catalog: Catalog) -> AssembledData:
        started_at = self._now()
        # each run starts a fresh pacing window
        self._pacer.reset()
        log.info(
            "ingest.start",
            base_url=self._base_url,
            components=len(catalog.components),
            utils=len(catalog.utils),
            files=catalog.total_files,
        )

        components: dict[str, EntryDocument] = {}
        for entry in catalog.components:
            components[entry.id] = await self._ingest_entry(entry)

        utils: dict[str, EntryDocument] = {}
        for entry in catalog.utils:
            utils[entry.id] = await self._ingest_entry(entry)

        metadata = MetadataDocument(
            last_updated=started_at,
            total_components=len(catalog.components),
            total_utils=len(catalog.utils),
            github_repo=self._github_repo,
        )
        return AssembledData(components=components, utils=utils, metadata=metadata)

    async def _ingest_entry(self, entry: CatalogEntry) -> EntryDocument:
        log.info("ingest.entry", kind=entry.kind, entry_id=entry.id)
        doc = EntryDocument(
            id=entry.id,
            name=entry.name,
            path=entry.path,
            dependencies=list(entry.dependencies),
            utils=list(entry.utils) if entry.utils is not None else None,
            components=list(entry.components) if entry.components is not None else None,
        )
        for language in entry.languages:
            doc.files[language] = []
        for language, filename in entry.iter_files():
            doc.files[language].append(await self._fetch_file(entry, language, filename))
        return doc

    async def _fetch_file(self, entry: CatalogEntry, language: str, filename: str) -> FetchedFile:
        url = self.file_url(entry, language, filename)
        async with self._pacer:
            content = await self._fetcher.fetch(url, self._max_retries)
        if content is None:
            return FetchedFile.failed(filename, url)
        return FetchedFile.fetched(filename, url, content)

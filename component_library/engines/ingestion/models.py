"""Data models for the ingestion engine.

Pure data structures — no DB dependencies. ``to_dict`` / ``from_dict``
produce the camelCase JSON shapes shared by the snapshot file, the
persisted documents and the HTTP API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

PLACEHOLDER_PREFIX = "// Error: Could not fetch content for "
METADATA_TYPE = "app_metadata"


def placeholder_content(filename: str) -> str:
    return f"{PLACEHOLDER_PREFIX}{filename}"


def content_size(content: str) -> int:
    """Size of *content* in bytes (UTF-8)."""
    return len(content.encode("utf-8"))


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Accept ISO strings (including a trailing ``Z``) or datetimes."""
    if value is None or isinstance(value, datetime):
        return value
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class FetchedFile:
    """Outcome of fetching one (entry, language, filename) triple."""

    filename: str
    url: str
    content: str
    success: bool
    size: int

    @classmethod
    def fetched(cls, filename: str, url: str, content: str) -> FetchedFile:
        return cls(filename=filename, url=url, content=content, success=True,
                   size=content_size(content))

    @classmethod
    def failed(cls, filename: str, url: str) -> FetchedFile:
        return cls(filename=filename, url=url, content=placeholder_content(filename),
                   success=False, size=0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "url": self.url,
            "content": self.content,
            "success": self.success,
            "size": self.size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FetchedFile:
        return cls(
            filename=data["filename"],
            url=data.get("url", ""),
            content=data.get("content", ""),
            success=bool(data.get("success", False)),
            size=int(data.get("size", 0)),
        )


@dataclass
class EntryDocument:
    """A component, utility or static-file group with its fetched files."""

    id: str
    name: str
    path: str
    dependencies: list[str] = field(default_factory=list)
    utils: list[str] | None = None
    components: list[str] | None = None
    files: dict[str, list[FetchedFile]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "dependencies": list(self.dependencies),
        }
        if self.components is not None:
            data["components"] = list(self.components)
        if self.utils is not None:
            data["utils"] = list(self.utils)
        data["files"] = {
            language: [f.to_dict() for f in files] for language, files in self.files.items()
        }
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EntryDocument:
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            path=data.get("path", ""),
            dependencies=list(data.get("dependencies") or []),
            utils=list(data["utils"]) if data.get("utils") is not None else None,
            components=(
                list(data["components"]) if data.get("components") is not None else None
            ),
            files={
                language: [FetchedFile.from_dict(f) for f in files]
                for language, files in (data.get("files") or {}).items()
            },
        )


@dataclass
class MetadataDocument:
    """Singleton run metadata, keyed by :data:`METADATA_TYPE`."""

    last_updated: datetime
    total_components: int
    total_utils: int
    github_repo: str
    database_updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": METADATA_TYPE,
            "lastUpdated": format_timestamp(self.last_updated),
            "totalComponents": self.total_components,
            "totalUtils": self.total_utils,
            "githubRepo": self.github_repo,
        }
        if self.database_updated_at is not None:
            data["databaseUpdatedAt"] = format_timestamp(self.database_updated_at)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetadataDocument:
        return cls(
            last_updated=parse_timestamp(data["lastUpdated"]),
            total_components=int(data.get("totalComponents", 0)),
            total_utils=int(data.get("totalUtils", 0)),
            github_repo=data.get("githubRepo", ""),
            database_updated_at=parse_timestamp(data.get("databaseUpdatedAt")),
        )


@dataclass
class AssembledData:
    """Full result of an ingestion run, mirroring the catalog's shape."""

    components: dict[str, EntryDocument]
    utils: dict[str, EntryDocument]
    metadata: MetadataDocument
    static: dict[str, EntryDocument] = field(default_factory=dict)

    def iter_documents(self):
        """Yield every component and utility document (static groups excluded)."""
        yield from self.components.values()
        yield from self.utils.values()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "components": {k: v.to_dict() for k, v in self.components.items()},
            "utils": {k: v.to_dict() for k, v in self.utils.items()},
        }
        if self.static:
            data["static"] = {k: v.to_dict() for k, v in self.static.items()}
        data["metadata"] = self.metadata.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssembledData:
        def _section(name: str) -> dict[str, EntryDocument]:
            section = data.get(name) or {}
            return {
                key: EntryDocument.from_dict({"id": key, **value})
                for key, value in section.items()
            }

        return cls(
            components=_section("components"),
            utils=_section("utils"),
            static=_section("static"),
            metadata=MetadataDocument.from_dict(data["metadata"]),
        )


@dataclass
class LanguageStats:
    files: int = 0
    size: int = 0


@dataclass
class AggregateStats:
    """Read-only projection over every FetchedFile of an assembled tree."""

    total_files: int = 0
    successful_files: int = 0
    total_size: int = 0
    language_stats: dict[str, LanguageStats] = field(default_factory=dict)

    @property
    def failed_files(self) -> int:
        return self.total_files - self.successful_files

    @property
    def success_rate(self) -> float:
        """Percentage of successful files (0.0 for an empty run)."""
        if self.total_files == 0:
            return 0.0
        return self.successful_files / self.total_files * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "successfulFiles": self.successful_files,
            "failedFiles": self.failed_files,
            "totalSize": self.total_size,
            "languageStats": {
                lang: {"files": s.files, "size": s.size}
                for lang, s in self.language_stats.items()
            },
        }

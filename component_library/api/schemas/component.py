"""Component / utility response schemas."""

from __future__ import annotations

from typing import Any

from component_library.api.schemas.common import CamelModel


class FileRecord(CamelModel):
    filename: str
    url: str
    content: str
    success: bool
    size: int


class ComponentDocument(CamelModel):
    id: str
    name: str
    path: str
    dependencies: list[str]
    components: list[str] | None = None
    utils: list[str] | None = None
    files: dict[str, list[FileRecord]]


class ComponentSummary(CamelModel):
    id: str
    name: str
    path: str
    dependencies: list[str]
    utils: list[str] | None = None


class ComponentListItem(ComponentSummary):
    files: dict[str, list[str]]


class UtilListItem(CamelModel):
    id: str
    name: str
    path: str
    dependencies: list[str]
    files: dict[str, list[str]]


class ComponentListing(CamelModel):
    components: list[ComponentListItem]
    utils: list[UtilListItem]


class LanguageFiles(CamelModel):
    component: str
    language: str
    files: list[FileRecord]


class ComponentFileDetail(CamelModel):
    filename: str
    language: str
    component: str
    url: str
    content: str
    size: int
    raw_url: str


class UtilFileDetail(CamelModel):
    filename: str
    language: str
    util: str
    url: str
    content: str
    size: int
    raw_url: str


class BulkEntry(CamelModel):
    info: ComponentSummary
    files: list[FileRecord]


class LanguagesInfo(CamelModel):
    component: str
    languages: list[str]
    files_per_language: dict[str, int]


class InfoStatistics(CamelModel):
    components: int
    utils: int
    last_updated: str | None = None
    database_updated_at: str | None = None


class InfoData(CamelModel):
    metadata: dict[str, Any]
    statistics: InfoStatistics

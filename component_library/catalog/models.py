"""Immutable catalog structures and their one-time validation."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

EntryKind = Literal["component", "util"]

_REQUIRED_FIELDS = ("name", "path", "files")


class CatalogError(ValueError):
    """Raised when a catalog definition is malformed."""


@dataclass(frozen=True)
class CatalogEntry:
    """One component or utility and the files expected per language."""

    id: str
    name: str
    path: str
    kind: EntryKind
    dependencies: tuple[str, ...] = ()
    components: tuple[str, ...] | None = None
    utils: tuple[str, ...] | None = None
    # language -> ordered filenames; stored as a tuple of pairs to stay hashable
    file_map: tuple[tuple[str, tuple[str, ...]], ...] = ()

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(lang for lang, _ in self.file_map)

    @property
    def files(self) -> dict[str, tuple[str, ...]]:
        return dict(self.file_map)

    def iter_files(self) -> Iterator[tuple[str, str]]:
        """Yield ``(language, filename)`` in declaration order."""
        for language, filenames in self.file_map:
            for filename in filenames:
                yield language, filename

    @property
    def file_count(self) -> int:
        return sum(len(names) for names in self.files.values())


@dataclass(frozen=True)
class Catalog:
    """Validated, ordered set of component and utility entries."""

    components: tuple[CatalogEntry, ...] = field(default_factory=tuple)
    utils: tuple[CatalogEntry, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _validate(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Catalog:
        """Build a catalog from ``{"components": {...}, "utils": {...}}``.

        Each section maps an entry id to its definition. Raises
        :class:`CatalogError` on missing fields, duplicate ids or
        filenames, and dangling references.
        """
        if not isinstance(data, Mapping):
            raise CatalogError("catalog must be a mapping")
        unknown = set(data) - {"components", "utils"}
        if unknown:
            raise CatalogError(f"unknown catalog sections: {sorted(unknown)}")
        components = _parse_section(data.get("components") or {}, "component")
        utils = _parse_section(data.get("utils") or {}, "util")
        return cls(components=components, utils=utils)

    def iter_entries(self) -> Iterator[CatalogEntry]:
        """Components first, then utilities, each in declaration order."""
        yield from self.components
        yield from self.utils

    def get(self, entry_id: str) -> CatalogEntry | None:
        for entry in self.iter_entries():
            if entry.id == entry_id:
                return entry
        return None

    @property
    def total_files(self) -> int:
        return sum(entry.file_count for entry in self.iter_entries())


def _as_str_tuple(value: Any, where: str) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise CatalogError(f"{where} must be a list of strings")
    return tuple(value)


def _parse_entry(entry_id: str, raw: Any, kind: EntryKind) -> CatalogEntry:
    if not isinstance(raw, Mapping):
        raise CatalogError(f"{kind} {entry_id!r}: definition must be a mapping")
    missing = [f for f in _REQUIRED_FIELDS if f not in raw]
    if missing:
        raise CatalogError(f"{kind} {entry_id!r}: missing required fields {missing}")
    for key in ("name", "path"):
        if not isinstance(raw[key], str) or not raw[key]:
            raise CatalogError(f"{kind} {entry_id!r}: {key!r} must be a non-empty string")

    files = raw["files"]
    if not isinstance(files, Mapping) or not files:
        raise CatalogError(f"{kind} {entry_id!r}: 'files' must be a non-empty mapping")
    file_map = tuple(
        (language, _as_str_tuple(names, f"{kind} {entry_id!r} files.{language}"))
        for language, names in files.items()
    )

    components = raw.get("components")
    utils = raw.get("utils")
    return CatalogEntry(
        id=entry_id,
        name=raw["name"],
        path=raw["path"],
        kind=kind,
        dependencies=_as_str_tuple(raw.get("dependencies", []), f"{kind} {entry_id!r} dependencies"),
        components=None if components is None else _as_str_tuple(
            components, f"{kind} {entry_id!r} components"
        ),
        utils=None if utils is None else _as_str_tuple(utils, f"{kind} {entry_id!r} utils"),
        file_map=file_map,
    )


def _parse_section(section: Any, kind: EntryKind) -> tuple[CatalogEntry, ...]:
    if not isinstance(section, Mapping):
        raise CatalogError(f"{kind} section must be a mapping of id -> definition")
    return tuple(_parse_entry(entry_id, raw, kind) for entry_id, raw in section.items())


def _validate(catalog: Catalog) -> None:
    seen: set[str] = set()
    for entry in catalog.iter_entries():
        if not entry.id:
            raise CatalogError("entry id must be a non-empty string")
        if entry.id in seen:
            raise CatalogError(f"duplicate entry id: {entry.id!r}")
        seen.add(entry.id)

        for language, filenames in entry.file_map:
            if len(set(filenames)) != len(filenames):
                raise CatalogError(f"{entry.id!r}: duplicate filename in {language!r} list")

    component_ids = {e.id for e in catalog.components}
    util_ids = {e.id for e in catalog.utils}
    for entry in catalog.iter_entries():
        for ref in entry.components or ():
            if ref not in component_ids:
                raise CatalogError(f"{entry.id!r} references unknown component {ref!r}")
        for ref in entry.utils or ():
            if ref not in util_ids:
                raise CatalogError(f"{entry.id!r} references unknown util {ref!r}")

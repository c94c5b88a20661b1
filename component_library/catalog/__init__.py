"""Catalog of UI components and shared utilities to mirror."""

from __future__ import annotations

import json
from pathlib import Path

from component_library.catalog.models import Catalog, CatalogEntry, CatalogError

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "catalog.json"

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CatalogError",
    "DEFAULT_CATALOG_PATH",
    "load_catalog",
]


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Read and validate a catalog JSON file (the bundled one by default).

    Raises :class:`CatalogError` if the file is unreadable or invalid.
    """
    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    try:
        data = json.loads(catalog_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"cannot read catalog {catalog_path}: {exc}") from exc
    return Catalog.from_mapping(data)

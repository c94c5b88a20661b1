"""Intermediate JSON representation of an assembled run (``component-data.json``)."""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from component_library.engines.ingestion.models import AssembledData

log = structlog.get_logger("component_library.ingestion")


class SnapshotError(Exception):
    """Raised when the snapshot file cannot be written or read back."""


def save_snapshot(data: AssembledData, path: str | Path) -> Path:
    """Write *data* as indented UTF-8 JSON and return the resolved path."""
    target = Path(path)
    try:
        target.write_text(
            json.dumps(data.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
        )
    except OSError as exc:
        raise SnapshotError(f"cannot write snapshot {target}: {exc}") from exc
    log.info("snapshot.saved", path=str(target.resolve()))
    return target.resolve()


def load_snapshot(path: str | Path) -> AssembledData:
    """Read a snapshot written by :func:`save_snapshot` (or a database backup)."""
    source = Path(path)
    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
        data = AssembledData.from_dict(raw)
    except (OSError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"cannot read snapshot {source}: {exc}") from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise SnapshotError(f"malformed snapshot {source}: {exc}") from exc
    log.info(
        "snapshot.loaded",
        path=str(source),
        components=len(data.components),
        utils=len(data.utils),
        static=len(data.static),
    )
    return data

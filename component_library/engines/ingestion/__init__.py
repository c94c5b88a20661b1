"""Ingestion engine — fetch catalog files from GitHub and assemble documents."""

from component_library.engines.ingestion.fetcher import RawFileFetcher
from component_library.engines.ingestion.models import (
    AggregateStats,
    AssembledData,
    EntryDocument,
    FetchedFile,
    MetadataDocument,
)
from component_library.engines.ingestion.orchestrator import Ingestor
from component_library.engines.ingestion.pacing import FixedIntervalPacer
from component_library.engines.ingestion.snapshot import (
    SnapshotError,
    load_snapshot,
    save_snapshot,
)
from component_library.engines.ingestion.stats import compute_stats, log_stats

__all__ = [
    "AggregateStats",
    "AssembledData",
    "EntryDocument",
    "FetchedFile",
    "FixedIntervalPacer",
    "Ingestor",
    "MetadataDocument",
    "RawFileFetcher",
    "SnapshotError",
    "compute_stats",
    "load_snapshot",
    "log_stats",
    "save_snapshot",
]

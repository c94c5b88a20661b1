"""Aggregate statistics over an assembled document tree."""

from __future__ import annotations

import structlog

from component_library.engines.ingestion.models import (
    AggregateStats,
    AssembledData,
    LanguageStats,
)

log = structlog.get_logger("component_library.ingestion")


def compute_stats(data: AssembledData) -> AggregateStats:
    """Count files, successes and bytes per language across components and utils."""
    stats = AggregateStats()
    for doc in data.iter_documents():
        for language, files in doc.files.items():
            lang = stats.language_stats.setdefault(language, LanguageStats())
            for f in files:
                stats.total_files += 1
                if f.success:
                    stats.successful_files += 1
                stats.total_size += f.size
                lang.files += 1
                lang.size += f.size
    return stats


def log_stats(stats: AggregateStats) -> None:
    """Emit the end-of-run summary."""
    log.info(
        "ingest.summary",
        total_files=stats.total_files,
        successful_files=stats.successful_files,
        failed_files=stats.failed_files,
        success_rate=f"{stats.success_rate:.2f}%",
        total_kb=f"{stats.total_size / 1024:.2f}",
    )
    for language, lang in stats.language_stats.items():
        log.info(
            "ingest.language",
            language=language,
            files=lang.files,
            kb=f"{lang.size / 1024:.2f}",
        )

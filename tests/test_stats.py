"""Tests for aggregate statistics."""

from __future__ import annotations

from unittest.mock import patch

from component_library.engines.ingestion.models import AggregateStats, FetchedFile
from component_library.engines.ingestion.stats import compute_stats, log_stats

from conftest import make_assembled, make_document


def _files(*specs):
    out = []
    for name, content in specs:
        if content is None:
            out.append(FetchedFile.failed(name, f"https://x/{name}"))
        else:
            out.append(FetchedFile.fetched(name, f"https://x/{name}", content))
    return out


class TestComputeStats:
    def test_counts_and_sizes(self):
        badge = make_document(
            "badge",
            files={
                "javascript": _files(("Badge.jsx", "abcd"), ("index.js", None)),
                "typescript": _files(("Badge.tsx", "abcdef")),
            },
        )
        cn = make_document("cn", files={"javascript": _files(("cn.js", "xy"))})
        stats = compute_stats(make_assembled([badge], [cn]))

        assert stats.total_files == 4
        assert stats.successful_files == 3
        assert stats.failed_files == 1
        assert stats.total_size == 4 + 6 + 2
        assert stats.language_stats["javascript"].files == 3
        assert stats.language_stats["javascript"].size == 6
        assert stats.language_stats["typescript"].size == 6
        assert stats.success_rate == 75.0

    def test_size_is_utf8_bytes(self):
        doc = make_document("badge", files={"javascript": _files(("a.js", "é"))})
        stats = compute_stats(make_assembled([doc], []))
        assert stats.total_size == 2

    def test_static_groups_excluded(self):
        data = make_assembled([], [])
        data.static["styles"] = make_document("styles", files={"css": _files(("a.css", "x"))})
        assert compute_stats(data).total_files == 0

    def test_empty_run(self):
        stats = compute_stats(make_assembled([], []))
        assert stats.total_files == 0
        assert stats.success_rate == 0.0
        assert stats.language_stats == {}

    def test_to_dict(self):
        stats = AggregateStats(total_files=2, successful_files=1, total_size=10)
        assert stats.to_dict() == {
            "totalFiles": 2,
            "successfulFiles": 1,
            "failedFiles": 1,
            "totalSize": 10,
            "languageStats": {},
        }


class TestLogStats:
    def test_summary_and_per_language_events(self):
        doc = make_document("badge", files={"javascript": _files(("a.js", "x" * 2048))})
        stats = compute_stats(make_assembled([doc], []))
        with patch("component_library.engines.ingestion.stats.log") as mock_log:
            log_stats(stats)
        calls = mock_log.info.call_args_list
        assert [c.args[0] for c in calls] == ["ingest.summary", "ingest.language"]
        assert calls[0].kwargs["success_rate"] == "100.00%"
        assert calls[1].kwargs["kb"] == "2.00"

"""Tests for the document and metadata DAOs (requires PostgreSQL)."""

from __future__ import annotations

from datetime import timedelta

import pytest

from component_library.dao.document_dao import ComponentDAO, StaticFileDAO, UtilDAO
from component_library.dao.metadata_dao import MetadataDAO
from component_library.engines.ingestion.models import FetchedFile

from conftest import NOW, make_assembled, make_document


@pytest.fixture
def component_dao():
    return ComponentDAO()


def _docs():
    return [
        make_document("accordion", name="Accordion", dependencies=["framer-motion", "lucide-react"]),
        make_document("badge", name="Badge", utils=["cn"]),
        make_document("progress_bar", name="Progress Bar", dependencies=["framer-motion"]),
    ]


# ── replace_all / list_all ────────────────────────────────────────────────


class TestReplaceAll:
    async def test_insert_and_list_in_order(self, component_dao, session):
        assert await component_dao.replace_all(session, _docs()) == 3
        rows = await component_dao.list_all(session)
        assert [r.id for r in rows] == ["accordion", "badge", "progress_bar"]

    async def test_replaces_previous_rows(self, component_dao, session):
        await component_dao.replace_all(session, _docs())
        await component_dao.replace_all(session, [make_document("card")])
        assert [r.id for r in await component_dao.list_all(session)] == ["card"]
        assert await component_dao.count(session) == 1

    async def test_empty_replace_clears(self, component_dao, session):
        await component_dao.replace_all(session, _docs())
        assert await component_dao.replace_all(session, []) == 0
        assert await component_dao.count(session) == 0

    async def test_document_round_trip(self, component_dao, session):
        files = {
            "typescript": [FetchedFile.fetched("Badge.tsx", "u1", "tsx")],
            "javascript": [FetchedFile.failed("Badge.jsx", "u2")],
        }
        doc = make_document("badge", utils=["cn"], files=files)
        await component_dao.replace_all(session, [doc])
        row = await component_dao.get_by_id(session, "badge")
        assert row.to_dict() == doc.to_dict()
        # language keys keep their original order
        assert list(row.files) == ["typescript", "javascript"]

    async def test_tables_are_independent(self, component_dao, session):
        await component_dao.replace_all(session, _docs())
        await UtilDAO().replace_all(session, [make_document("cn")])
        await StaticFileDAO().replace_all(session, [])
        assert await component_dao.count(session) == 3
        assert await UtilDAO().count(session) == 1


# ── search ────────────────────────────────────────────────────────────────


class TestSearch:
    async def test_name_substring_case_insensitive(self, component_dao, session):
        await component_dao.replace_all(session, _docs())
        rows = await component_dao.search(session, q="BAD")
        assert [r.id for r in rows] == ["badge"]

    async def test_matches_id(self, component_dao, session):
        await component_dao.replace_all(session, _docs())
        rows = await component_dao.search(session, q="progress_")
        assert [r.id for r in rows] == ["progress_bar"]

    async def test_like_wildcards_are_literal(self, component_dao, session):
        await component_dao.replace_all(session, _docs())
        assert await component_dao.search(session, q="%") == []
        assert [r.id for r in await component_dao.search(session, q="s_b")] == ["progress_bar"]

    async def test_dependency_exact_match(self, component_dao, session):
        await component_dao.replace_all(session, _docs())
        rows = await component_dao.search(session, dependency="framer-motion")
        assert [r.id for r in rows] == ["accordion", "progress_bar"]
        assert await component_dao.search(session, dependency="framer") == []

    async def test_combined_filters(self, component_dao, session):
        await component_dao.replace_all(session, _docs())
        rows = await component_dao.search(session, q="acc", dependency="framer-motion")
        assert [r.id for r in rows] == ["accordion"]

    async def test_no_filters_returns_all(self, component_dao, session):
        await component_dao.replace_all(session, _docs())
        assert len(await component_dao.search(session)) == 3


# ── metadata ──────────────────────────────────────────────────────────────


class TestMetadataDAO:
    async def test_upsert_inserts_then_overwrites(self, session):
        dao = MetadataDAO()
        meta = make_assembled().metadata
        await dao.upsert(session, meta, database_updated_at=NOW)
        await dao.upsert(session, meta, database_updated_at=NOW + timedelta(hours=1))

        assert await dao.count(session) == 1
        row = await dao.get(session)
        await session.refresh(row)
        assert row.type == "app_metadata"
        assert row.database_updated_at == NOW + timedelta(hours=1)
        assert row.to_dict()["githubRepo"] == "org/repo"

    async def test_get_empty(self, session):
        assert await MetadataDAO().get(session) is None

"""Tests for ComponentService (DAOs mocked)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from component_library.models.component import Component
from component_library.models.metadata import AppMetadata
from component_library.models.util import Util
from component_library.services import NotFoundError, StoreError
from component_library.services.component_service import ComponentService, content_type_for

from conftest import NOW


def _file(name: str, content: str = "x") -> dict:
    return {
        "filename": name,
        "url": f"https://raw.example.test/{name}",
        "content": content,
        "success": True,
        "size": len(content),
    }


def _badge() -> Component:
    return Component(
        id="badge",
        position=0,
        name="Badge",
        path="Badge",
        dependencies=[],
        utils=["cn"],
        files={"javascript": [_file("Badge.jsx", "jsx"), _file("index.js")]},
    )


def _accordion() -> Component:
    return Component(
        id="accordion",
        position=1,
        name="Accordion",
        path="Accordion",
        dependencies=["framer-motion"],
        utils=["cn"],
        files={
            "javascript": [_file("Accordion.jsx")],
            "typescript": [_file("Accordion.tsx"), _file("index.ts")],
        },
    )


def _cn() -> Util:
    return Util(
        id="cn",
        position=0,
        name="cn",
        path="utils",
        dependencies=["clsx"],
        files={"javascript": [_file("cn.js", "export const cn = () => '';")]},
    )


@pytest.fixture
def daos():
    components = {"badge": _badge(), "accordion": _accordion()}
    utils = {"cn": _cn()}

    component_dao = MagicMock()
    component_dao.get_by_id = AsyncMock(side_effect=lambda s, pk: components.get(pk))
    component_dao.list_all = AsyncMock(return_value=list(components.values()))
    component_dao.count = AsyncMock(return_value=len(components))
    component_dao.search = AsyncMock(return_value=[components["accordion"]])

    util_dao = MagicMock()
    util_dao.get_by_id = AsyncMock(side_effect=lambda s, pk: utils.get(pk))
    util_dao.list_all = AsyncMock(return_value=list(utils.values()))
    util_dao.count = AsyncMock(return_value=len(utils))

    metadata_dao = MagicMock()
    metadata_dao.get = AsyncMock(
        return_value=AppMetadata(
            type="app_metadata",
            last_updated=NOW,
            total_components=2,
            total_utils=1,
            github_repo="org/repo",
            database_updated_at=NOW,
        )
    )
    return component_dao, util_dao, metadata_dao


@pytest.fixture
def svc(daos):
    return ComponentService(*daos)


session = MagicMock()


# ── content_type_for ──────────────────────────────────────────────────────


class TestContentType:
    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("Badge.jsx", "application/javascript"),
            ("index.js", "application/javascript"),
            ("Badge.tsx", "application/typescript"),
            ("index.ts", "application/typescript"),
            ("styles.css", "text/css"),
            ("package.json", "application/json"),
            ("README.md", "text/markdown"),
            ("README.MD", "text/markdown"),
            ("LICENSE", "text/plain"),
            ("image.svg", "text/plain"),
        ],
    )
    def test_extension_mapping(self, filename, expected):
        assert content_type_for(filename) == expected


# ── queries ───────────────────────────────────────────────────────────────


class TestQueries:
    async def test_info(self, svc):
        info = await svc.info(session)
        assert info["metadata"]["githubRepo"] == "org/repo"
        assert info["statistics"]["components"] == 2
        assert info["statistics"]["utils"] == 1
        assert info["statistics"]["lastUpdated"] == NOW.isoformat()

    async def test_info_without_metadata(self, svc, daos):
        daos[2].get.return_value = None
        info = await svc.info(session)
        assert info["metadata"] == {}
        assert info["statistics"]["lastUpdated"] is None

    async def test_list_all_collapses_files(self, svc):
        listing = await svc.list_all(session)
        badge = listing["components"][0]
        assert badge["files"] == {"javascript": ["Badge.jsx", "index.js"]}
        assert listing["utils"][0]["files"] == {"javascript": ["cn.js"]}
        assert set(badge) == {"id", "name", "path", "dependencies", "utils", "files"}

    async def test_get_component(self, svc):
        doc = await svc.get_component(session, "badge")
        assert doc["files"]["javascript"][0]["content"] == "jsx"
        assert doc["utils"] == ["cn"]

    async def test_get_component_not_found(self, svc):
        with pytest.raises(NotFoundError, match="Component not found"):
            await svc.get_component(session, "nope")

    async def test_component_files(self, svc):
        result = await svc.component_files(session, "accordion", "typescript")
        assert result["component"] == "accordion"
        assert [f["filename"] for f in result["files"]] == ["Accordion.tsx", "index.ts"]

    async def test_component_files_missing_language(self, svc):
        with pytest.raises(NotFoundError, match="Language not found"):
            await svc.component_files(session, "badge", "typescript")

    async def test_component_file(self, svc):
        record = await svc.component_file(session, "badge", "javascript", "Badge.jsx")
        assert record["content"] == "jsx"

    @pytest.mark.parametrize(
        "component_id, language, filename, message",
        [
            ("nope", "javascript", "Badge.jsx", "Component not found"),
            ("badge", "typescript", "Badge.tsx", "Language not found"),
            ("badge", "javascript", "Missing.jsx", "File not found"),
        ],
    )
    async def test_component_file_not_found(self, svc, component_id, language, filename, message):
        with pytest.raises(NotFoundError, match=message):
            await svc.component_file(session, component_id, language, filename)

    async def test_util_file(self, svc):
        record = await svc.util_file(session, "cn", "javascript", "cn.js")
        assert record["content"].startswith("export const cn")

    async def test_util_file_not_found(self, svc):
        with pytest.raises(NotFoundError, match="Utility not found"):
            await svc.util_file(session, "portal", "javascript", "Portal.jsx")

    async def test_bulk_only_entries_with_language(self, svc):
        result = await svc.bulk(session, "typescript")
        assert list(result) == ["accordion"]
        assert result["accordion"]["info"]["name"] == "Accordion"
        assert len(result["accordion"]["files"]) == 2

    async def test_bulk_unknown_language_is_empty(self, svc):
        assert await svc.bulk(session, "python") == {}

    async def test_search_forwards_filters(self, svc, daos):
        rows = await svc.search(session, q="acc", dependency="framer-motion")
        daos[0].search.assert_awaited_once_with(session, q="acc", dependency="framer-motion")
        assert rows == [
            {
                "id": "accordion",
                "name": "Accordion",
                "path": "Accordion",
                "dependencies": ["framer-motion"],
                "utils": ["cn"],
            }
        ]

    async def test_languages(self, svc):
        result = await svc.languages(session, "accordion")
        assert result == {
            "component": "accordion",
            "languages": ["javascript", "typescript"],
            "filesPerLanguage": {"javascript": 1, "typescript": 2},
        }


# ── store failures ────────────────────────────────────────────────────────


class TestStoreErrors:
    async def test_sqlalchemy_error_becomes_store_error(self, svc, daos):
        daos[0].list_all.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(StoreError, match="Failed to fetch components") as exc_info:
            await svc.list_all(session)
        assert "down" in exc_info.value.details

    async def test_not_found_passes_through(self, svc, daos):
        with pytest.raises(NotFoundError):
            await svc.languages(session, "nope")

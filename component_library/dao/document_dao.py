"""Document DAOs — components, utils and static_files tables."""

from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from component_library.dao.base import BaseDAO, ModelT
from component_library.engines.ingestion.models import EntryDocument
from component_library.models.component import Component
from component_library.models.static_file import StaticFile
from component_library.models.util import Util


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def document_row(doc: EntryDocument, position: int) -> dict[str, Any]:
    """Column values for one assembled document."""
    data = doc.to_dict()
    return {
        "id": doc.id,
        "position": position,
        "name": doc.name,
        "path": doc.path,
        "dependencies": data["dependencies"],
        "utils": data.get("utils"),
        "components": data.get("components"),
        "files": data["files"],
    }


class DocumentDAO(BaseDAO[ModelT]):
    """Full-replace writes and ordered reads for one document table."""

    # ── read ──────────────────────────────────────────────────────────────

    async def list_all(self, session: AsyncSession) -> list[ModelT]:
        """All documents in catalog order."""
        stmt = select(self.model).order_by(self.model.position, self.model.id)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    # ── write ─────────────────────────────────────────────────────────────

    async def replace_all(self, session: AsyncSession, docs: list[EntryDocument]) -> int:
        """Delete every existing row, then insert *docs*. Returns inserted count.

        Runs inside the caller's transaction; it is not atomic with writes to
        other tables.
        """
        await self.delete_all(session)
        return await self.insert_many(
            session, [document_row(doc, i) for i, doc in enumerate(docs)]
        )


class ComponentDAO(DocumentDAO[Component]):
    model = Component

    async def search(
        self,
        session: AsyncSession,
        *,
        q: str | None = None,
        dependency: str | None = None,
    ) -> list[Component]:
        """Case-insensitive substring match on name or id, exact dependency match."""
        stmt = select(Component)
        if q:
            pattern = f"%{_escape_like(q)}%"
            stmt = stmt.where(
                or_(
                    Component.name.ilike(pattern, escape="\\"),
                    Component.id.ilike(pattern, escape="\\"),
                )
            )
        if dependency:
            stmt = stmt.where(Component.dependencies.contains([dependency]))
        stmt = stmt.order_by(Component.position, Component.id)
        result = await session.execute(stmt)
        return list(result.scalars().all())


class UtilDAO(DocumentDAO[Util]):
    model = Util


class StaticFileDAO(DocumentDAO[StaticFile]):
    model = StaticFile

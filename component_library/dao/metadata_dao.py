"""MetadataDAO — the single app_metadata row."""

from datetime import datetime

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from component_library.dao.base import BaseDAO
from component_library.engines.ingestion.models import METADATA_TYPE, MetadataDocument
from component_library.models.metadata import AppMetadata


class MetadataDAO(BaseDAO[AppMetadata]):
    model = AppMetadata

    async def get(self, session: AsyncSession) -> AppMetadata | None:
        return await self.get_by_id(session, METADATA_TYPE)

    async def upsert(
        self,
        session: AsyncSession,
        metadata: MetadataDocument,
        *,
        database_updated_at: datetime,
    ) -> None:
        """Insert or overwrite the metadata row keyed by ``type``."""
        values = {
            "type": METADATA_TYPE,
            "last_updated": metadata.last_updated,
            "total_components": metadata.total_components,
            "total_utils": metadata.total_utils,
            "github_repo": metadata.github_repo,
            "database_updated_at": database_updated_at,
        }
        stmt = insert(AppMetadata).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["type"],
            set_={k: stmt.excluded[k] for k in values if k != "type"},
        )
        await session.execute(stmt)

"""Shared DAO plumbing for the text-keyed document tables."""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from component_library.core.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseDAO(Generic[ModelT]):
    """Table-wide reads and writes; subclasses bind ``model``.

    Methods never commit. They run inside whatever transaction the caller
    opened on *session*.
    """

    model: type[ModelT]

    async def get_by_id(self, session: AsyncSession, key: str) -> ModelT | None:
        if not key:
            raise ValueError(f"{self.model.__tablename__}: empty primary key")
        return await session.get(self.model, key)

    async def insert_many(self, session: AsyncSession, rows: list[dict[str, Any]]) -> int:
        """Bulk INSERT *rows* (column dicts) in one statement; return the row count."""
        if not rows:
            return 0
        await session.execute(insert(self.model), rows)
        return len(rows)

    async def delete_all(self, session: AsyncSession) -> int:
        result = await session.execute(
            delete(self.model).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def count(self, session: AsyncSession) -> int:
        result = await session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()

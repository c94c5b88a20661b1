"""Columns shared by the components, utils and static_files tables."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Integer, Text, func, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column


class DocumentMixin:
    """One persisted entry: identity, dependency lists and per-language files.

    ``files`` is plain JSON (not JSONB) so language keys keep their catalog
    order. ``position`` records the entry's place in the source data.
    """

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    path: Mapped[str] = mapped_column(Text, nullable=False)
    dependencies: Mapped[list[str]] = mapped_column(
        JSONB, nullable=False, server_default=text("'[]'::jsonb")
    )
    utils: Mapped[Optional[list[str]]] = mapped_column(JSONB)
    components: Mapped[Optional[list[str]]] = mapped_column(JSONB)
    files: Mapped[dict[str, list[dict[str, Any]]]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def to_dict(self) -> dict[str, Any]:
        """Document shape as stored by the ingestion pipeline."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "dependencies": list(self.dependencies or []),
        }
        if self.components is not None:
            data["components"] = list(self.components)
        if self.utils is not None:
            data["utils"] = list(self.utils)
        data["files"] = self.files or {}
        return data

"""metadata table — a single row keyed by ``type``."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from component_library.core.database import Base
from component_library.engines.ingestion.models import format_timestamp


class AppMetadata(Base):
    __tablename__ = "metadata"

    type: Mapped[str] = mapped_column(Text, primary_key=True)
    last_updated: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    total_components: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_utils: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    github_repo: Mapped[Optional[str]] = mapped_column(Text)
    database_updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "lastUpdated": format_timestamp(self.last_updated),
            "totalComponents": self.total_components,
            "totalUtils": self.total_utils,
            "githubRepo": self.github_repo,
            "databaseUpdatedAt": format_timestamp(self.database_updated_at),
        }

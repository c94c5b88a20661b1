"""static_files table — stylesheet and asset groups shipped next to components."""

from sqlalchemy import Index

from component_library.core.database import Base
from component_library.models.document import DocumentMixin


class StaticFile(DocumentMixin, Base):
    __tablename__ = "static_files"

    __table_args__ = (Index("idx_static_files_position", "position"),)

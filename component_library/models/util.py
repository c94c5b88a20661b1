"""utils table."""

from sqlalchemy import Index

from component_library.core.database import Base
from component_library.models.document import DocumentMixin


class Util(DocumentMixin, Base):
    __tablename__ = "utils"

    __table_args__ = (Index("idx_utils_position", "position"),)

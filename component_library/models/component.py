"""components table."""

from sqlalchemy import Index

from component_library.core.database import Base
from component_library.models.document import DocumentMixin


class Component(DocumentMixin, Base):
    __tablename__ = "components"

    __table_args__ = (
        Index("idx_components_dependencies", "dependencies", postgresql_using="gin"),
        Index("idx_components_position", "position"),
    )

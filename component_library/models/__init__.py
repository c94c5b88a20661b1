"""SQLAlchemy ORM models — one file per table."""

from component_library.models.component import Component
from component_library.models.metadata import AppMetadata
from component_library.models.static_file import StaticFile
from component_library.models.util import Util

__all__ = [
    "AppMetadata",
    "Component",
    "StaticFile",
    "Util",
]

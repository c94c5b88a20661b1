"""Shared response envelope."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Serializes snake_case fields under camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(BaseModel, Generic[T]):
    """``{"success": true, "data": ...}`` wrapper used by every JSON endpoint."""

    success: bool = True
    data: T


class ErrorBody(BaseModel):
    success: bool = False
    error: str
    details: str | None = None

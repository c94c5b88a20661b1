"""Utilities router — JSON view of one stored utility file."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from component_library.api.deps import get_component_service, get_session
from component_library.api.routers.components import raw_url
from component_library.api.schemas.common import Envelope
from component_library.api.schemas.component import UtilFileDetail
from component_library.services.component_service import ComponentService

router = APIRouter()


@router.get("/{util_id}/{language}/{filename}", response_model=Envelope[UtilFileDetail])
async def get_util_file(
    util_id: str,
    language: str,
    filename: str,
    request: Request,
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Envelope[UtilFileDetail]:
    record = await svc.util_file(session, util_id, language, filename)
    return Envelope(
        data=UtilFileDetail(
            filename=record["filename"],
            language=language,
            util=util_id,
            url=record["url"],
            content=record["content"],
            size=record["size"],
            raw_url=raw_url(request, "utils", util_id, language, filename),
        )
    )

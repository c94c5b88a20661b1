"""Raw router — serves stored file contents like a raw-file host."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from component_library.api.deps import get_component_service, get_session
from component_library.services import NotFoundError
from component_library.services.component_service import ComponentService, content_type_for

router = APIRouter()


def _raw_response(record: dict, filename: str) -> Response:
    return Response(content=record["content"], media_type=content_type_for(filename))


@router.get("/utils/{util_id}/{language}/{filename}", response_class=Response)
async def get_raw_util_file(
    util_id: str,
    language: str,
    filename: str,
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Response:
    try:
        record = await svc.util_file(session, util_id, language, filename)
    except NotFoundError as exc:
        return PlainTextResponse(str(exc), status_code=404)
    return _raw_response(record, filename)


@router.get("/{component_id}/{language}/{filename}", response_class=Response)
async def get_raw_component_file(
    component_id: str,
    language: str,
    filename: str,
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Response:
    try:
        record = await svc.component_file(session, component_id, language, filename)
    except NotFoundError as exc:
        return PlainTextResponse(str(exc), status_code=404)
    return _raw_response(record, filename)

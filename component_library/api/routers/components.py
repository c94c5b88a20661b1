"""Components router — JSON views of stored component documents."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from component_library.api.deps import get_component_service, get_session
from component_library.api.schemas.common import Envelope
from component_library.api.schemas.component import (
    BulkEntry,
    ComponentDocument,
    ComponentFileDetail,
    ComponentListing,
    ComponentSummary,
    LanguageFiles,
    LanguagesInfo,
)
from component_library.services.component_service import ComponentService

router = APIRouter()


def raw_url(request: Request, *parts: str) -> str:
    """Absolute URL of a raw-content endpoint on this server."""
    return str(request.base_url).rstrip("/") + "/api/raw/" + "/".join(parts)


@router.get("", response_model=Envelope[ComponentListing])
async def list_components(
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Envelope[ComponentListing]:
    return Envelope(data=ComponentListing.model_validate(await svc.list_all(session)))


@router.get("/search", response_model=Envelope[list[ComponentSummary]])
async def search_components(
    q: str | None = Query(None),
    dependency: str | None = Query(None),
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Envelope[list[ComponentSummary]]:
    rows = await svc.search(session, q=q, dependency=dependency)
    return Envelope(data=[ComponentSummary.model_validate(r) for r in rows])


@router.get("/bulk/{language}", response_model=Envelope[dict[str, BulkEntry]])
async def bulk_components(
    language: str,
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Envelope[dict[str, BulkEntry]]:
    result = await svc.bulk(session, language)
    return Envelope(data={k: BulkEntry.model_validate(v) for k, v in result.items()})


@router.get("/{component_id}", response_model=Envelope[ComponentDocument])
async def get_component(
    component_id: str,
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Envelope[ComponentDocument]:
    doc = await svc.get_component(session, component_id)
    return Envelope(data=ComponentDocument.model_validate(doc))


@router.get("/{component_id}/files/{language}", response_model=Envelope[LanguageFiles])
async def get_component_files(
    component_id: str,
    language: str,
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Envelope[LanguageFiles]:
    data = await svc.component_files(session, component_id, language)
    return Envelope(data=LanguageFiles.model_validate(data))


@router.get(
    "/{component_id}/files/{language}/{filename}",
    response_model=Envelope[ComponentFileDetail],
)
async def get_component_file(
    component_id: str,
    language: str,
    filename: str,
    request: Request,
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Envelope[ComponentFileDetail]:
    record = await svc.component_file(session, component_id, language, filename)
    return Envelope(
        data=ComponentFileDetail(
            filename=record["filename"],
            language=language,
            component=component_id,
            url=record["url"],
            content=record["content"],
            size=record["size"],
            raw_url=raw_url(request, component_id, language, filename),
        )
    )


@router.get("/{component_id}/languages", response_model=Envelope[LanguagesInfo])
async def get_component_languages(
    component_id: str,
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Envelope[LanguagesInfo]:
    data = await svc.languages(session, component_id)
    return Envelope(data=LanguagesInfo.model_validate(data))

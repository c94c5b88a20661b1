"""Metadata / statistics router."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from component_library.api.deps import get_component_service, get_session
from component_library.api.schemas.common import Envelope
from component_library.api.schemas.component import InfoData
from component_library.services.component_service import ComponentService

router = APIRouter()


@router.get("/info", response_model=Envelope[InfoData])
async def get_info(
    session: AsyncSession = Depends(get_session),
    svc: ComponentService = Depends(get_component_service),
) -> Envelope[InfoData]:
    return Envelope(data=InfoData.model_validate(await svc.info(session)))

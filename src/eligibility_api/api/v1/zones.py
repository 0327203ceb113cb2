"""Eligibility zone administration endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from eligibility_api.core.dependencies import get_async_session
from eligibility_api.schemas.zone import ZoneCreateRequest, ZoneResponse
from eligibility_api.services import zone_service

zones_router = APIRouter(prefix="/zones", tags=["zones"])


@zones_router.get("", response_model=list[ZoneResponse])
async def list_active_zones(
    session: AsyncSession = Depends(get_async_session),  # noqa: B008
) -> list[ZoneResponse]:
    """List active zones, highest priority first."""
    zones = await zone_service.list_active_zones(session)
    return [ZoneResponse.model_validate(z) for z in zones]


@zones_router.get("/{zone_name}", response_model=ZoneResponse)
async def get_zone(
    zone_name: str,
    session: AsyncSession = Depends(get_async_session),  # noqa: B008
) -> ZoneResponse:
    zone = await zone_service.get_zone_by_name(session, zone_name)
    if zone is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Zone not found")
    return ZoneResponse.model_validate(zone)


@zones_router.put("", response_model=ZoneResponse)
async def upsert_zone(
    body: ZoneCreateRequest,
    session: AsyncSession = Depends(get_async_session),  # noqa: B008
) -> ZoneResponse:
    """Create a zone or replace the one with the same name."""
    zone = await zone_service.upsert_zone(session, body)
    await session.commit()
    return ZoneResponse.model_validate(zone)

"""Eligible region directory endpoints."""

from fastapi import APIRouter, Depends, Query

from eligibility_api.core.dependencies import get_region_directory
from eligibility_api.lib.regions import RegionDirectory, normalize_state
from eligibility_api.schemas.region import (
    RegionCheckResponse,
    RegionCitiesResponse,
    RegionCountiesResponse,
    RegionStatesResponse,
)

regions_router = APIRouter(prefix="/regions", tags=["regions"])


@regions_router.get("/states", response_model=RegionStatesResponse)
async def list_states(
    directory: RegionDirectory = Depends(get_region_directory),  # noqa: B008
) -> RegionStatesResponse:
    return RegionStatesResponse(states=directory.get_eligible_states())


@regions_router.get("/states/{state}/counties", response_model=RegionCountiesResponse)
async def list_counties(
    state: str,
    directory: RegionDirectory = Depends(get_region_directory),  # noqa: B008
) -> RegionCountiesResponse:
    return RegionCountiesResponse(
        state=state,
        counties=directory.get_eligible_counties_in_state(normalize_state(state)),
    )


@regions_router.get("/states/{state}/counties/{county}/cities", response_model=RegionCitiesResponse)
async def list_cities(
    state: str,
    county: str,
    directory: RegionDirectory = Depends(get_region_directory),  # noqa: B008
) -> RegionCitiesResponse:
    return RegionCitiesResponse(
        state=state,
        county=county,
        cities=directory.get_eligible_cities_in_county(normalize_state(state), county),
    )


@regions_router.get("/check", response_model=RegionCheckResponse)
async def check_region(
    city: str = Query(..., min_length=1),
    state: str = Query(..., min_length=1),
    county: str | None = Query(default=None),
    directory: RegionDirectory = Depends(get_region_directory),  # noqa: B008
) -> RegionCheckResponse:
    """Check a city (and optional county) against the eligible region directory."""
    check = directory.check_eligibility_with_reason(city, county, state)
    return RegionCheckResponse(eligible=check.eligible, reason=check.reason)

"""Pydantic v2 schemas for the eligible region directory."""

from pydantic import BaseModel


class RegionStatesResponse(BaseModel):
    states: list[str]


class RegionCountiesResponse(BaseModel):
    state: str
    counties: list[str]


class RegionCitiesResponse(BaseModel):
    state: str
    county: str
    cities: list[str]


class RegionCheckResponse(BaseModel):
    """Region verdict for a city, optional county and state."""

    eligible: bool
    reason: str

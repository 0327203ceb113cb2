"""Pydantic v2 schemas for eligibility zones."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from eligibility_api.lib.rules import ZoneType


class ZoneBase(BaseModel):
    """Fields shared by zone input and output."""

    zone_name: str = Field(..., min_length=1, max_length=255)
    zone_type: ZoneType
    zip_codes: list[str] = Field(default_factory=list)
    cities: list[str] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)
    min_latitude: float | None = Field(default=None, ge=-90, le=90)
    max_latitude: float | None = Field(default=None, ge=-90, le=90)
    min_longitude: float | None = Field(default=None, ge=-180, le=180)
    max_longitude: float | None = Field(default=None, ge=-180, le=180)
    is_active: bool = True
    priority: int = Field(default=0, ge=0)


class ZoneCreateRequest(ZoneBase):
    """Zone definition used for seeding and upserts."""

    @model_validator(mode="after")
    def validate_bounds(self) -> "ZoneCreateRequest":
        bounds = (self.min_latitude, self.max_latitude, self.min_longitude, self.max_longitude)
        if any(b is not None for b in bounds):
            if any(b is None for b in bounds):
                msg = "Coordinate bounds require all of min/max latitude and min/max longitude"
                raise ValueError(msg)
            if self.min_latitude > self.max_latitude or self.min_longitude > self.max_longitude:  # type: ignore[operator]
                msg = "Minimum bounds must not exceed maximum bounds"
                raise ValueError(msg)
        return self


class ZoneResponse(ZoneBase):
    """Zone as stored."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

"""Pydantic v2 schemas for eligibility cache administration."""

from pydantic import BaseModel, Field


class CacheStatsResponse(BaseModel):
    """Eligibility cache statistics."""

    eligibility_entries: int = Field(description="Number of cached eligibility results")
    total_db_size: int | None = Field(default=None, description="Total keys in the Redis database")


class CacheKeyStatusResponse(BaseModel):
    """Existence and remaining TTL of one cached eligibility result."""

    key: str
    cached: bool
    ttl_seconds: int = Field(description="Remaining TTL; -2 missing, -1 no expiry or unavailable")


class CacheTTLUpdateRequest(BaseModel):
    """New TTL for a cached eligibility result."""

    seconds: int = Field(..., gt=0)


class CacheClearResponse(BaseModel):
    """Number of eligibility entries removed."""

    deleted: int

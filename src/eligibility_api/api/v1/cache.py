"""Eligibility cache administration endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from eligibility_api.core.dependencies import get_result_cache
from eligibility_api.schemas.cache import (
    CacheClearResponse,
    CacheKeyStatusResponse,
    CacheStatsResponse,
    CacheTTLUpdateRequest,
)
from eligibility_api.services.cache_service import ResultCache

cache_router = APIRouter(prefix="/cache", tags=["cache"])


@cache_router.get("/stats", response_model=CacheStatsResponse)
async def cache_stats(
    cache: ResultCache = Depends(get_result_cache),  # noqa: B008
) -> CacheStatsResponse:
    """Count cached eligibility results and report the Redis database size."""
    stats = await cache.get_stats()
    return CacheStatsResponse(eligibility_entries=stats.eligibility_entries, total_db_size=stats.total_db_size)


@cache_router.delete("", response_model=CacheClearResponse)
async def clear_cache(
    cache: ResultCache = Depends(get_result_cache),  # noqa: B008
) -> CacheClearResponse:
    """Remove every cached eligibility result."""
    return CacheClearResponse(deleted=await cache.clear_all())


@cache_router.get("/entries/{key}", response_model=CacheKeyStatusResponse)
async def cache_entry_status(
    key: str,
    cache: ResultCache = Depends(get_result_cache),  # noqa: B008
) -> CacheKeyStatusResponse:
    """Report whether a key is cached and its remaining TTL."""
    return CacheKeyStatusResponse(key=key, cached=await cache.is_cached(key), ttl_seconds=await cache.get_ttl(key))


@cache_router.put("/entries/{key}/ttl", response_model=CacheKeyStatusResponse)
async def update_cache_entry_ttl(
    key: str,
    body: CacheTTLUpdateRequest,
    cache: ResultCache = Depends(get_result_cache),  # noqa: B008
) -> CacheKeyStatusResponse:
    """Reset the TTL of a cached eligibility result."""
    if not await cache.update_ttl(key, body.seconds):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cache entry not found")
    return CacheKeyStatusResponse(key=key, cached=True, ttl_seconds=await cache.get_ttl(key))


@cache_router.delete("/entries/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def evict_cache_entry(
    key: str,
    cache: ResultCache = Depends(get_result_cache),  # noqa: B008
) -> None:
    """Evict one cached eligibility result."""
    if not await cache.evict(key):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cache entry not found")

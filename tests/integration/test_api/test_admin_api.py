"""Integration tests for the cache, zone and region administration endpoints."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from eligibility_api.api.v1.cache import cache_router
from eligibility_api.api.v1.regions import regions_router
from eligibility_api.api.v1.zones import zones_router
from eligibility_api.core.dependencies import get_async_session, get_region_directory, get_result_cache
from eligibility_api.lib.regions import RegionDirectory
from eligibility_api.schemas.eligibility import AddressEligibilityResponse
from eligibility_api.services.cache_service import ResultCache


@pytest.fixture
def result_cache(fake_redis) -> ResultCache:
    return ResultCache(fake_redis, ttl_seconds=60)


@pytest.fixture
def app(result_cache: ResultCache, async_session: AsyncSession) -> FastAPI:
    app = FastAPI()
    app.include_router(cache_router, prefix="/api/v1")
    app.include_router(zones_router, prefix="/api/v1")
    app.include_router(regions_router, prefix="/api/v1")
    app.dependency_overrides[get_result_cache] = lambda: result_cache
    app.dependency_overrides[get_async_session] = lambda: async_session
    app.dependency_overrides[get_region_directory] = lambda: RegionDirectory(
        {"california": {"Alameda": ["Alameda", "Oakland"]}, "nevada": {"Washoe": ["Reno"]}}
    )
    return app


@pytest.fixture
def client(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def _cache_entry(cache: ResultCache, key: str) -> None:
    await cache.cache_eligibility(key, AddressEligibilityResponse(eligible=True, reason="ok"))


class TestCacheEndpoints:
    """Tests for /api/v1/cache."""

    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient, result_cache: ResultCache) -> None:
        await _cache_entry(result_cache, "a")
        resp = await client.get("/api/v1/cache/stats")
        assert resp.status_code == 200
        assert resp.json() == {"eligibility_entries": 1, "total_db_size": 1}

    @pytest.mark.asyncio
    async def test_entry_status(self, client: AsyncClient, result_cache: ResultCache) -> None:
        await _cache_entry(result_cache, "a")
        data = (await client.get("/api/v1/cache/entries/a")).json()
        assert data["cached"] is True
        assert 0 < data["ttl_seconds"] <= 60

        missing = (await client.get("/api/v1/cache/entries/b")).json()
        assert missing == {"key": "b", "cached": False, "ttl_seconds": -2}

    @pytest.mark.asyncio
    async def test_update_ttl(self, client: AsyncClient, result_cache: ResultCache) -> None:
        await _cache_entry(result_cache, "a")
        resp = await client.put("/api/v1/cache/entries/a/ttl", json={"seconds": 600})
        assert resp.status_code == 200
        assert resp.json()["ttl_seconds"] > 60

        assert (await client.put("/api/v1/cache/entries/b/ttl", json={"seconds": 600})).status_code == 404
        assert (await client.put("/api/v1/cache/entries/a/ttl", json={"seconds": 0})).status_code == 422

    @pytest.mark.asyncio
    async def test_evict(self, client: AsyncClient, result_cache: ResultCache) -> None:
        await _cache_entry(result_cache, "a")
        assert (await client.delete("/api/v1/cache/entries/a")).status_code == 204
        assert (await client.delete("/api/v1/cache/entries/a")).status_code == 404

    @pytest.mark.asyncio
    async def test_clear(self, client: AsyncClient, result_cache: ResultCache) -> None:
        await _cache_entry(result_cache, "a")
        await _cache_entry(result_cache, "b")
        resp = await client.delete("/api/v1/cache")
        assert resp.json() == {"deleted": 2}


class TestZoneEndpoints:
    """Tests for /api/v1/zones."""

    @pytest.mark.asyncio
    async def test_upsert_and_list(self, client: AsyncClient) -> None:
        resp = await client.put(
            "/api/v1/zones",
            json={"zone_name": "Premium ZIP Codes", "zone_type": "ZIP_CODE", "priority": 15, "zip_codes": ["60601"]},
        )
        assert resp.status_code == 200
        assert resp.json()["zip_codes"] == ["60601"]

        listed = (await client.get("/api/v1/zones")).json()
        assert [z["zone_name"] for z in listed] == ["Premium ZIP Codes"]

        fetched = await client.get("/api/v1/zones/Premium ZIP Codes")
        assert fetched.status_code == 200
        assert fetched.json()["priority"] == 15

    @pytest.mark.asyncio
    async def test_unknown_zone_returns_404(self, client: AsyncClient) -> None:
        assert (await client.get("/api/v1/zones/Nope")).status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_zone_type_returns_422(self, client: AsyncClient) -> None:
        resp = await client.put("/api/v1/zones", json={"zone_name": "x", "zone_type": "COUNTY"})
        assert resp.status_code == 422


class TestRegionEndpoints:
    """Tests for /api/v1/regions."""

    @pytest.mark.asyncio
    async def test_states(self, client: AsyncClient) -> None:
        assert (await client.get("/api/v1/regions/states")).json() == {"states": ["california", "nevada"]}

    @pytest.mark.asyncio
    async def test_counties_and_cities(self, client: AsyncClient) -> None:
        counties = (await client.get("/api/v1/regions/states/nevada/counties")).json()
        assert counties == {"state": "nevada", "counties": ["washoe"]}

        cities = (await client.get("/api/v1/regions/states/Nevada/counties/Washoe/cities")).json()
        assert cities["cities"] == ["Reno"]

    @pytest.mark.asyncio
    async def test_check(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/regions/check", params={"city": "Reno", "county": "Washoe", "state": "NV"})
        assert resp.json() == {
            "eligible": True,
            "reason": "Address in Reno, Washoe County, NV is in an eligible region",
        }

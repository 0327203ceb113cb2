"""Unit tests for the address lookup service."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from eligibility_api.lib.geocoder import AddressComponents, GeocodingProviderError
from eligibility_api.services.cache_service import ADDRESS_LOOKUP_PREFIX, LookupCache
from eligibility_api.services.lookup_service import AddressLookupService

RENO = AddressComponents(street="100 Main St", city="Reno", county="Washoe", state="Nevada", zip="89501")


def _geocoder(result: AddressComponents | None = None, error: Exception | None = None) -> MagicMock:
    geocoder = MagicMock()
    geocoder.provider_name = "fixtures"
    geocoder.geocode = AsyncMock(return_value=result, side_effect=error)
    return geocoder


class TestAddressLookupService:
    """Tests for AddressLookupService.lookup."""

    @pytest.mark.asyncio
    async def test_blank_address(self, fake_redis) -> None:
        geocoder = _geocoder(RENO)
        service = AddressLookupService(LookupCache(fake_redis), geocoder)
        assert await service.lookup("   ") is None
        assert await service.lookup(None) is None
        geocoder.geocode.assert_not_called()

    @pytest.mark.asyncio
    async def test_geocoder_result_is_cached(self, fake_redis) -> None:
        geocoder = _geocoder(RENO)
        service = AddressLookupService(LookupCache(fake_redis), geocoder)

        assert await service.lookup("100 Main St, Reno") == RENO
        stored = json.loads(fake_redis.store[ADDRESS_LOOKUP_PREFIX + "100 main st, reno"])
        assert stored["county"] == "Washoe"

        assert await service.lookup("100 Main St, Reno") == RENO
        geocoder.geocode.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_corrupt_cache_entry_falls_back_to_geocoder(self, fake_redis) -> None:
        fake_redis.store[ADDRESS_LOOKUP_PREFIX + "100 main st, reno"] = "not json"
        geocoder = _geocoder(RENO)
        service = AddressLookupService(LookupCache(fake_redis), geocoder)
        assert await service.lookup("100 Main St, Reno") == RENO
        geocoder.geocode.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_not_found_is_not_cached(self, fake_redis) -> None:
        service = AddressLookupService(LookupCache(fake_redis), _geocoder(None))
        assert await service.lookup("1 Nowhere Rd") is None
        assert fake_redis.store == {}

    @pytest.mark.asyncio
    async def test_provider_error_resolves_to_none(self, fake_redis) -> None:
        geocoder = _geocoder(error=GeocodingProviderError("google", "Connection to geocoding provider failed"))
        service = AddressLookupService(LookupCache(fake_redis), geocoder)
        assert await service.lookup("1 Main St") is None

    @pytest.mark.asyncio
    async def test_no_geocoder(self, fake_redis) -> None:
        service = AddressLookupService(LookupCache(fake_redis), None)
        assert await service.lookup("1 Main St") is None

    @pytest.mark.asyncio
    async def test_spellings_differing_in_case_and_whitespace_share_entry(self, fake_redis) -> None:
        geocoder = _geocoder(RENO)
        service = AddressLookupService(LookupCache(fake_redis), geocoder)

        assert await service.lookup("100 Main St, Reno, NV 89501") == RENO
        assert await service.lookup("  100 main st, reno, nv 89501 ") == RENO

        geocoder.geocode.assert_awaited_once()
        assert list(fake_redis.store) == [ADDRESS_LOOKUP_PREFIX + "100 main st, reno, nv 89501"]

"""Tests for persisted addresses and their verdicts against SQLite."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from eligibility_api.lib.rules import EligibilityResult
from eligibility_api.schemas.eligibility import AddressEligibilityRequest
from eligibility_api.services.address_service import find_existing_address, save_or_update_address


def _request(**kwargs: object) -> AddressEligibilityRequest:
    values: dict[str, object] = {
        "street_address": "123 N Michigan Ave",
        "city": "Chicago",
        "state": "IL",
        "zip_code": "60601",
    }
    values.update(kwargs)
    return AddressEligibilityRequest(**values)  # type: ignore[arg-type]


class TestAddressService:
    """Tests for find_existing_address and save_or_update_address."""

    @pytest.mark.asyncio
    async def test_find_missing(self, async_session: AsyncSession) -> None:
        assert await find_existing_address(async_session, "1 Main St", "Reno", "NV", "89501") is None

    @pytest.mark.asyncio
    async def test_save_creates_address(self, async_session: AsyncSession) -> None:
        result = EligibilityResult(eligible=True, reason="ok", confidence_score=1.0)
        address = await save_or_update_address(async_session, _request(latitude=41.88, longitude=-87.62), result)

        found = await find_existing_address(async_session, "123 N Michigan Ave", "Chicago", "IL", "60601")
        assert found is not None
        assert found.id == address.id
        assert found.is_eligible is True
        assert found.eligibility_reason == "ok"
        assert found.latitude == pytest.approx(41.88)
        assert found.country == "USA"

    @pytest.mark.asyncio
    async def test_save_updates_existing_address(self, async_session: AsyncSession) -> None:
        first = await save_or_update_address(
            async_session, _request(), EligibilityResult(eligible=True, reason="ok", confidence_score=1.0)
        )
        second = await save_or_update_address(
            async_session,
            _request(),
            EligibilityResult(eligible=False, reason="no", confidence_score=0.0),
        )
        assert second.id == first.id
        assert second.is_eligible is False
        assert second.eligibility_reason == "no"
        assert second.version == 2

    @pytest.mark.asyncio
    async def test_lookup_is_exact(self, async_session: AsyncSession) -> None:
        await save_or_update_address(
            async_session, _request(), EligibilityResult(eligible=True, reason="ok", confidence_score=1.0)
        )
        assert await find_existing_address(async_session, "123 n michigan ave", "Chicago", "IL", "60601") is None

"""Eligibility service — orchestrates caches, curated data, zones and rules.

Structured checks: result cache → preloaded directory → persisted verdict →
zone queries + rule engine → persist → result cache.

Free-text checks: result cache → preloaded directory → address lookup →
region directory → result cache.
"""

import time

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from eligibility_api.lib.geocoder import AddressComponents, build_cache_key, format_address
from eligibility_api.lib.preloaded import PreloadedAddressDirectory
from eligibility_api.lib.regions import RegionDirectory
from eligibility_api.lib.rules import EligibilityResult, EligibilityRuleEngine, Zone
from eligibility_api.models.address import Address
from eligibility_api.schemas.eligibility import (
    AddressDetails,
    AddressEligibilityRequest,
    AddressEligibilityResponse,
)
from eligibility_api.services import zone_service
from eligibility_api.services.address_service import find_existing_address, save_or_update_address
from eligibility_api.services.cache_service import ResultCache
from eligibility_api.services.lookup_service import AddressLookupService


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _region_label(components: AddressComponents) -> str:
    return f"{components.county}, {components.state}"


def build_preloaded_response(
    components: AddressComponents,
    request: AddressEligibilityRequest | None = None,
) -> AddressEligibilityResponse:
    """Build a response from a curated entry's embedded verdict.

    Components missing from the entry fall back to the request's values.
    Confidence is fixed at 1.0.

    Args:
        components: Curated entry with ``eligible`` set.
        request: Structured request, when the check came from one.

    Returns:
        AddressEligibilityResponse with ``cache_hit`` False.
    """
    eligible = bool(components.eligible)
    details = AddressDetails(
        street_address=components.street or (request.street_address if request else None),
        street_address_2=request.street_address_2 if request else None,
        city=components.city or (request.city if request else None),
        county=components.county,
        state=components.state or (request.state if request else None),
        zip_code=components.zip or (request.zip_code if request else None),
        country=components.country or (request.country if request else None),
        latitude=components.latitude if components.latitude is not None else (request.latitude if request else None),
        longitude=(
            components.longitude if components.longitude is not None else (request.longitude if request else None)
        ),
        formatted_address=components.formatted(),
    )
    if eligible:
        reason = f"Address is in eligible region: {components.county} County, {components.state}"
    else:
        reason = f"Address is not in an eligible region: {components.county} County, {components.state}"

    return AddressEligibilityResponse(
        eligible=eligible,
        reason=reason,
        address=details,
        matched_zones=[_region_label(components)] if eligible else [],
        confidence_score=1.0,
        cache_hit=False,
    )


def build_address_details(address: Address) -> AddressDetails:
    """Echo a persisted address with its formatted line."""
    details = AddressDetails.model_validate(address)
    details.formatted_address = format_address(
        street_address=address.street_address,
        street_address_2=address.street_address_2,
        city=address.city,
        state=address.state,
        zip_code=address.zip_code,
        country=address.country,
    )
    return details


class AddressEligibilityService:
    """Address eligibility pipeline.

    Args:
        session: Database session for zone queries and verdict persistence.
        rule_engine: Zone rule engine.
        result_cache: Cache of full eligibility responses.
        lookup_service: Free-text address resolution.
        region_directory: Static eligible region table.
        preloaded_directory: Curated addresses with embedded verdicts.
    """

    def __init__(
        self,
        session: AsyncSession | None,
        *,
        rule_engine: EligibilityRuleEngine,
        result_cache: ResultCache,
        lookup_service: AddressLookupService,
        region_directory: RegionDirectory,
        preloaded_directory: PreloadedAddressDirectory,
    ) -> None:
        self._session = session
        self._rule_engine = rule_engine
        self._result_cache = result_cache
        self._lookup = lookup_service
        self._regions = region_directory
        self._preloaded = preloaded_directory

    async def check_eligibility(self, request: AddressEligibilityRequest) -> AddressEligibilityResponse:
        """Check a structured address.

        Args:
            request: Structured address request.

        Returns:
            AddressEligibilityResponse; the reason is dropped when the
            request opts out of it.

        Raises:
            RuntimeError: If the service was built without a database session.
        """
        started = time.perf_counter()
        cache_key = build_cache_key(request.street_address, request.city, request.state, request.zip_code)

        cached = await self._result_cache.get_cached_eligibility(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for address: {cache_key}")
            return self._finish(cached, started, include_reason=request.include_reason)

        preloaded = self._find_preloaded(request)
        if preloaded is not None:
            logger.info("Found address in preloaded directory")
            response = build_preloaded_response(preloaded, request)
            await self._result_cache.cache_eligibility(cache_key, response)
            return self._finish(response, started, include_reason=request.include_reason)

        session = self._require_session()
        existing = await find_existing_address(
            session, request.street_address, request.city, request.state, request.zip_code
        )
        if existing is not None and existing.is_eligible is not None:
            logger.debug(f"Found existing address with eligibility: {existing.is_eligible}")
            response = AddressEligibilityResponse(
                eligible=existing.is_eligible,
                reason=existing.eligibility_reason,
                address=build_address_details(existing),
                cache_hit=True,
            )
            await self._result_cache.cache_eligibility(cache_key, response)
            return self._finish(response, started, include_reason=request.include_reason)

        request = await self._resolve_coordinates(request)
        result = await self._evaluate(session, request)
        address = await save_or_update_address(session, request, result)

        response = AddressEligibilityResponse(
            eligible=result.eligible,
            reason=result.reason,
            address=build_address_details(address),
            matched_zones=result.matched_zone_names,
            confidence_score=result.confidence_score,
            cache_hit=False,
        )
        await self._result_cache.cache_eligibility(cache_key, response)
        return self._finish(response, started, include_reason=request.include_reason)

    async def check_address_text(self, address: str) -> AddressEligibilityResponse | None:
        """Check a free-text address against curated data and the region table.

        Args:
            address: Raw address text.

        Returns:
            AddressEligibilityResponse, or None when the address cannot be
            resolved by any source.
        """
        started = time.perf_counter()
        cache_key = build_cache_key(address, "", "", "")

        cached = await self._result_cache.get_cached_eligibility(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for address: {cache_key}")
            return self._finish(cached, started)

        curated = self._preloaded.lookup(address)
        if curated is not None and curated.eligible is not None:
            logger.info("Found address in preloaded directory")
            response = build_preloaded_response(curated)
        else:
            components = await self._lookup.lookup(address)
            if components is None:
                logger.info("Address could not be resolved")
                return None
            if components.eligible is not None:
                response = build_preloaded_response(components)
            else:
                response = self._region_response(components)

        await self._result_cache.cache_eligibility(cache_key, response)
        return self._finish(response, started)

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            msg = "Structured eligibility checks require a database session"
            raise RuntimeError(msg)
        return self._session

    def _find_preloaded(self, request: AddressEligibilityRequest) -> AddressComponents | None:
        candidates = (
            request.street_address,
            format_address(
                street_address=request.street_address,
                city=request.city,
                state=request.state,
                zip_code=request.zip_code,
            ),
        )
        for text in candidates:
            entry = self._preloaded.lookup(text)
            if entry is not None and entry.eligible is not None:
                return entry
        return None

    async def _resolve_coordinates(self, request: AddressEligibilityRequest) -> AddressEligibilityRequest:
        if not request.check_coordinates or (request.latitude is not None and request.longitude is not None):
            return request
        text = format_address(
            street_address=request.street_address,
            street_address_2=request.street_address_2,
            city=request.city,
            state=request.state,
            zip_code=request.zip_code,
        )
        components = await self._lookup.lookup(text)
        if components is None or components.latitude is None or components.longitude is None:
            return request
        logger.debug("Resolved coordinates for coordinate zone matching")
        return request.model_copy(update={"latitude": components.latitude, "longitude": components.longitude})

    async def _evaluate(self, session: AsyncSession, request: AddressEligibilityRequest) -> EligibilityResult:
        matched: list[Zone] = []
        matched.extend(await zone_service.find_active_zones_by_zip_code(session, request.zip_code))
        matched.extend(await zone_service.find_active_zones_by_city_and_state(session, request.city, request.state))
        if request.check_coordinates and request.latitude is not None and request.longitude is not None:
            matched.extend(
                await zone_service.find_active_zones_by_coordinates(session, request.latitude, request.longitude)
            )
        return self._rule_engine.evaluate(request, matched)

    def _region_response(self, components: AddressComponents) -> AddressEligibilityResponse:
        check = self._regions.check_eligibility_with_reason(components.city, components.county, components.state)
        if check.eligible:
            label = _region_label(components) if components.county else f"{components.city}, {components.state}"
            matched = [label]
        else:
            matched = []
        return AddressEligibilityResponse(
            eligible=check.eligible,
            reason=check.reason,
            address=AddressDetails(
                street_address=components.street,
                city=components.city,
                county=components.county,
                state=components.state,
                zip_code=components.zip,
                country=components.country,
                latitude=components.latitude,
                longitude=components.longitude,
                formatted_address=components.formatted(),
            ),
            matched_zones=matched,
            confidence_score=1.0 if check.eligible else 0.0,
            cache_hit=False,
        )

    @staticmethod
    def _finish(
        response: AddressEligibilityResponse,
        started: float,
        *,
        include_reason: bool = True,
    ) -> AddressEligibilityResponse:
        update: dict[str, object] = {"processing_time_ms": _elapsed_ms(started)}
        if not include_reason:
            update["reason"] = None
        return response.model_copy(update=update)

"""Address lookup service — resolves free-text addresses into components.

Resolution order: lookup cache, then the configured geocoder (Google Maps
or static fixtures). Provider failures resolve to "not found".
"""

import json

from loguru import logger

from eligibility_api.lib.geocoder import AddressComponents, BaseGeocoder, GeocodingProviderError
from eligibility_api.services.cache_service import LookupCache


class AddressLookupService:
    """Cached free-text address resolution.

    Args:
        lookup_cache: Cache of resolved components.
        geocoder: Provider used on cache miss; None disables resolution.
    """

    def __init__(self, lookup_cache: LookupCache, geocoder: BaseGeocoder | None) -> None:
        self._cache = lookup_cache
        self._geocoder = geocoder

    async def lookup(self, address: str | None) -> AddressComponents | None:
        """Resolve an address into components.

        Args:
            address: Raw address text.

        Returns:
            AddressComponents, or None for blank input or when no source
            knows the address.
        """
        if address is None or not address.strip():
            return None

        cached = await self._cache.get(address)
        if cached is not None:
            try:
                components = AddressComponents.from_dict(json.loads(cached))
            except (json.JSONDecodeError, AttributeError, TypeError) as e:
                logger.error(f"Error parsing cached address data: {e}")
            else:
                logger.debug("Address found in lookup cache")
                return components

        components = await self._resolve(address)
        if components is not None:
            await self._cache.set(address, json.dumps(components.to_dict()))
        return components

    async def _resolve(self, address: str) -> AddressComponents | None:
        if self._geocoder is None:
            logger.debug("No address source configured")
            return None
        try:
            components = await self._geocoder.geocode(address)
        except GeocodingProviderError as e:
            logger.error(f"Error looking up address with {e.provider_name}: {e.message}")
            return None
        if components is None:
            logger.debug(f"No {self._geocoder.provider_name} result for address")
        return components

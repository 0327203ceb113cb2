"""Geocoder library — address resolution into structured components.

Public API:
    - AddressComponents: Resolved address component dataclass
    - normalize_lookup_key: Normalize raw address text into a lookup key
    - build_cache_key: Build the eligibility cache key for an address
    - format_address: Format address parts as a display line
    - BaseGeocoder: Abstract provider interface
    - GeocodingProviderError: Provider transport/service failure
    - GoogleMapsGeocoder: Google Maps provider
    - FixtureGeocoder: Static mapping-file provider
    - load_address_entries: Load an address mapping file
    - get_geocoder: Build the provider selected by settings
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from eligibility_api.lib.geocoder.address import (
    AddressComponents,
    build_cache_key,
    format_address,
    normalize_city,
    normalize_lookup_key,
)
from eligibility_api.lib.geocoder.base import BaseGeocoder, GeocodingProviderError
from eligibility_api.lib.geocoder.fixtures import FixtureGeocoder, load_address_entries
from eligibility_api.lib.geocoder.google_maps import GoogleMapsGeocoder

if TYPE_CHECKING:
    from eligibility_api.core.config import Settings


def get_geocoder(settings: Settings) -> BaseGeocoder | None:
    """Build the geocoder selected by settings.

    Google Maps is used when enabled; otherwise the static fixtures file is
    used when one is configured.

    Args:
        settings: Application settings.

    Returns:
        A geocoder instance, or None when neither source is configured.
    """
    if settings.google_maps_enabled:
        return GoogleMapsGeocoder(
            api_key=settings.google_maps_api_key,
            timeout=settings.google_maps_timeout,
        )
    if settings.address_fixtures_path:
        try:
            return FixtureGeocoder.from_file(settings.address_fixtures_path)
        except FileNotFoundError:
            logger.warning(f"Address fixtures file not found: {settings.address_fixtures_path}")
            return FixtureGeocoder({})
    return None


__all__ = [
    "AddressComponents",
    "BaseGeocoder",
    "FixtureGeocoder",
    "GeocodingProviderError",
    "GoogleMapsGeocoder",
    "build_cache_key",
    "format_address",
    "get_geocoder",
    "load_address_entries",
    "normalize_city",
    "normalize_lookup_key",
]

"""Google Maps Geocoding API provider.

Uses the Google Maps Geocoding API
(https://developers.google.com/maps/documentation/geocoding/)
to resolve free-text addresses into street, city, county, state, ZIP and
country components. Requires an API key.
"""

import httpx
from loguru import logger

from eligibility_api.lib.geocoder.address import AddressComponents
from eligibility_api.lib.geocoder.base import BaseGeocoder, GeocodingProviderError

GOOGLE_API_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DEFAULT_TIMEOUT = 10.0

_COUNTY_SUFFIX = " County"


class GoogleMapsGeocoder(BaseGeocoder):
    """Google Maps geocoder provider."""

    def __init__(
        self,
        api_key: str | None,
        timeout: float = DEFAULT_TIMEOUT,
        region: str = "us",
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._region = region

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def requires_api_key(self) -> bool:
        return True

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def geocode(self, address: str) -> AddressComponents | None:
        """Geocode an address using the Google Maps API.

        Args:
            address: Raw address text.

        Returns:
            AddressComponents, or None when no API key is set or the API
            answers with a non-OK status, no results or an unusable payload.

        Raises:
            GeocodingProviderError: On timeouts, connection failures and HTTP
                error responses.
        """
        if not self.is_configured:
            logger.warning("Google Maps API key is not configured")
            return None

        params = {
            "address": address,
            "key": self._api_key,
            "region": self._region,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(GOOGLE_API_URL, params=params)
                response.raise_for_status()

            data = response.json()
            return self._parse_response(data)

        except httpx.TimeoutException as e:
            logger.warning("Google Maps geocoder timeout for address (redacted)")
            raise GeocodingProviderError("google", "Geocoding request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Google Maps geocoder HTTP error {e.response.status_code}")
            raise GeocodingProviderError(
                "google",
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.ConnectError as e:
            logger.warning("Google Maps geocoder connection error")
            raise GeocodingProviderError("google", "Connection to geocoding provider failed") from e
        except GeocodingProviderError:
            raise
        except Exception as e:
            logger.exception("Google Maps geocoder unexpected error")
            raise GeocodingProviderError("google", f"Unexpected error: {e}") from e

    def _parse_response(self, data: dict) -> AddressComponents | None:
        """Parse a Google Maps API response into address components.

        Each entry of ``address_components`` is classified by its first type:
        street number and route are joined into the street line, the
        second-level administrative area becomes the county (without its
        " County" suffix), the first-level area becomes the state.

        Args:
            data: Raw JSON response from Google Maps API.

        Returns:
            AddressComponents, or None for zero results, error statuses and
            malformed payloads.
        """
        api_status = data.get("status", "UNKNOWN")

        if api_status == "ZERO_RESULTS":
            return None

        if api_status in ("REQUEST_DENIED", "OVER_QUERY_LIMIT", "INVALID_REQUEST"):
            msg = data.get("error_message", api_status)
            logger.warning(f"Google Maps API error: {msg}")
            return None

        if api_status != "OK":
            logger.warning(f"Unexpected Google Maps API status: {api_status}")
            return None

        results = data.get("results", [])
        if not results:
            return None

        best = results[0]
        parts: dict[str, str] = {}
        street_number: str | None = None
        route: str | None = None

        for component in best.get("address_components", []):
            types = component.get("types") or []
            if not types:
                continue
            long_name = component.get("long_name", "")
            match types[0]:
                case "street_number":
                    street_number = long_name
                case "route":
                    route = long_name
                case "locality":
                    parts["city"] = long_name
                case "administrative_area_level_2":
                    parts["county"] = long_name.removesuffix(_COUNTY_SUFFIX)
                case "administrative_area_level_1":
                    parts["state"] = long_name
                case "country":
                    parts["country"] = long_name
                case "postal_code":
                    parts["zip"] = long_name

        street = " ".join(p for p in (street_number, route) if p)
        if street:
            parts["street"] = street

        location = best.get("geometry", {}).get("location") or {}
        try:
            latitude = float(location["lat"]) if "lat" in location else None
            longitude = float(location["lng"]) if "lng" in location else None
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to parse Google Maps response: {e}")
            return None

        components = AddressComponents(
            street=parts.get("street"),
            city=parts.get("city"),
            state=parts.get("state"),
            zip=parts.get("zip"),
            county=parts.get("county"),
            country=parts.get("country"),
            latitude=latitude,
            longitude=longitude,
        )
        if components.is_empty:
            return None
        return components

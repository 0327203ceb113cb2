"""Address keys, formatting, and the structured component record.

Cache identities are derived here so every layer (result cache, lookup
cache, preloaded directory, persisted addresses) keys addresses the same way.
"""

import re
from dataclasses import dataclass, fields
from typing import Any

_WHITESPACE = re.compile(r"\s+")

# Component keys shared by fixtures, geocoder output and the lookup cache
COMPONENT_KEYS: tuple[str, ...] = (
    "street",
    "city",
    "state",
    "zip",
    "county",
    "country",
    "latitude",
    "longitude",
    "eligible",
)


def normalize_lookup_key(address: str | None) -> str:
    """Normalize raw address text into a lookup key.

    Args:
        address: Raw address text as submitted by a caller.

    Returns:
        Lowercased, trimmed text. Empty string for None or blank input.
    """
    if not address:
        return ""
    return address.strip().lower()


def normalize_city(city: str | None) -> str:
    """Normalize a city name for case-insensitive comparison."""
    if city is None:
        return ""
    return city.strip().lower()


def build_cache_key(
    street_address: str | None,
    city: str | None,
    state: str | None,
    zip_code: str | None,
) -> str:
    """Build the eligibility cache key for an address.

    The key is the lowercased ``street:city:state:zip`` join with each part
    trimmed, so capitalization and surrounding whitespace collide while any
    differing component yields a different key.

    Args:
        street_address: Street line.
        city: City name.
        state: State name or abbreviation.
        zip_code: ZIP or ZIP+4.

    Returns:
        Cache key string.
    """
    parts = [(p or "").strip() for p in (street_address, city, state, zip_code)]
    return ":".join(parts).lower()


def format_address(
    *,
    street_address: str | None,
    street_address_2: str | None = None,
    city: str | None,
    state: str | None,
    zip_code: str | None,
    country: str | None = None,
) -> str:
    """Format address parts as a single display line.

    Produces ``street[, street2], city, state zip[, country]``.
    """
    line = street_address or ""
    if street_address_2:
        line = f"{line}, {street_address_2}"
    line = f"{line}, {city or ''}, {state or ''} {zip_code or ''}"
    if country:
        line = f"{line}, {country}"
    return _WHITESPACE.sub(" ", line).strip()


def _parse_bool(value: Any) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "yes", "1"):
        return True
    if text in ("false", "no", "0"):
        return False
    return None


def _parse_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class AddressComponents:
    """Structured components resolved for an address.

    ``eligible`` is only set for curated entries that carry a pre-verified
    verdict; geocoder output always leaves it as None.
    """

    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    county: str | None = None
    country: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    eligible: bool | None = None

    @property
    def is_empty(self) -> bool:
        """Whether no component was resolved at all."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, str]:
        """Convert to a flat string mapping, omitting unset components.

        Returns:
            Dictionary of component name to string value.
        """
        result: dict[str, str] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            result[f.name] = str(value).lower() if isinstance(value, bool) else str(value)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AddressComponents":
        """Build components from a mapping, ignoring unknown keys.

        Accepts ``zip_code``/``postal_code`` as aliases for ``zip``.

        Args:
            data: Component mapping (fixture entry, cached JSON, API payload).

        Returns:
            AddressComponents instance.
        """
        values = {k: data.get(k) for k in COMPONENT_KEYS}
        if values["zip"] is None:
            values["zip"] = data.get("zip_code") or data.get("postal_code")

        def _text(key: str) -> str | None:
            value = values[key]
            return None if value is None else str(value)

        return cls(
            street=_text("street"),
            city=_text("city"),
            state=_text("state"),
            zip=_text("zip"),
            county=_text("county"),
            country=_text("country"),
            latitude=_parse_float(values["latitude"]),
            longitude=_parse_float(values["longitude"]),
            eligible=_parse_bool(values["eligible"]),
        )

    def formatted(self) -> str:
        """Format as ``street, city, state zip[, country]``."""
        return format_address(
            street_address=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip,
            country=self.country,
        )

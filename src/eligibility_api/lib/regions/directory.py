"""Static state → county → city eligibility table.

The directory is built once from configuration and never mutated; reloading
means constructing a new instance and swapping the reference.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Any, NamedTuple

import yaml
from loguru import logger

from eligibility_api.lib.geocoder.address import normalize_city

STATE_ABBREVIATIONS: Mapping[str, str] = MappingProxyType(
    {
        "AL": "alabama",
        "AK": "alaska",
        "AZ": "arizona",
        "AR": "arkansas",
        "CA": "california",
        "CO": "colorado",
        "CT": "connecticut",
        "DE": "delaware",
        "FL": "florida",
        "GA": "georgia",
        "HI": "hawaii",
        "ID": "idaho",
        "IL": "illinois",
        "IN": "indiana",
        "IA": "iowa",
        "KS": "kansas",
        "KY": "kentucky",
        "LA": "louisiana",
        "ME": "maine",
        "MD": "maryland",
        "MA": "massachusetts",
        "MI": "michigan",
        "MN": "minnesota",
        "MS": "mississippi",
        "MO": "missouri",
        "MT": "montana",
        "NE": "nebraska",
        "NV": "nevada",
        "NH": "new hampshire",
        "NJ": "new jersey",
        "NM": "new mexico",
        "NY": "new york",
        "NC": "north carolina",
        "ND": "north dakota",
        "OH": "ohio",
        "OK": "oklahoma",
        "OR": "oregon",
        "PA": "pennsylvania",
        "RI": "rhode island",
        "SC": "south carolina",
        "SD": "south dakota",
        "TN": "tennessee",
        "TX": "texas",
        "UT": "utah",
        "VT": "vermont",
        "VA": "virginia",
        "WA": "washington",
        "WV": "west virginia",
        "WI": "wisconsin",
        "WY": "wyoming",
    }
)


def normalize_key(key: str | None) -> str:
    """Normalize a state or county key for case-insensitive lookup.

    Two-character keys are treated as abbreviations and uppercased; all
    other keys are lowercased. Surrounding whitespace is removed first.

    Args:
        key: State or county name or abbreviation.

    Returns:
        Normalized key; empty string for None.
    """
    if key is None:
        return ""
    trimmed = key.strip()
    if len(trimmed) == 2:
        return trimmed.upper()
    return trimmed.lower()


def normalize_state(state: str | None) -> str:
    """Normalize a state, expanding known abbreviations to full names.

    ``"ca"`` becomes ``"california"``; unknown abbreviations stay uppercased.
    """
    if state is None or not state.strip():
        return ""
    key = normalize_key(state)
    if len(key) == 2:
        return STATE_ABBREVIATIONS.get(key, key)
    return key


class RegionCheck(NamedTuple):
    """Region eligibility verdict with a human-readable reason."""

    eligible: bool
    reason: str


def _has_text(value: str | None) -> bool:
    return value is not None and bool(value.strip())


class RegionDirectory:
    """Query surface over the eligible state → county → city table.

    Every lookup degrades to False or an empty list when a level is
    missing; nothing here raises for unknown input.

    Args:
        states: Mapping of state → county → list of eligible city names.
            Keys are normalized on construction.
    """

    def __init__(self, states: Mapping[str, Mapping[str, Sequence[str]]] | None = None) -> None:
        normalized: dict[str, Mapping[str, tuple[str, ...]]] = {}
        for state, counties in (states or {}).items():
            state_key = normalize_key(state)
            county_map: dict[str, tuple[str, ...]] = {}
            for county, cities in (counties or {}).items():
                county_map[normalize_key(county)] = tuple(str(c) for c in (cities or ()))
            normalized[state_key] = MappingProxyType(county_map)
        self._states: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType(normalized)

        if not self._states:
            logger.warning("No eligible regions configured! Check the eligible regions file")
        else:
            logger.info(f"Loaded eligible regions for {len(self._states)} states")
            for state, counties in self._states.items():
                total_cities = sum(len(cities) for cities in counties.values())
                logger.debug(f"State '{state}': {len(counties)} counties, {total_cities} cities")

    @property
    def is_empty(self) -> bool:
        return not self._states

    def is_city_eligible(self, state: str | None, county: str | None, city: str | None) -> bool:
        """Check whether a city is eligible in a given state and county."""
        if state is None or county is None or city is None:
            return False
        counties = self._states.get(normalize_key(state))
        if counties is None:
            return False
        cities = counties.get(normalize_key(county))
        if cities is None:
            return False
        target = normalize_city(city)
        return any(normalize_city(c) == target for c in cities)

    def is_city_eligible_in_state(self, state: str | None, city: str | None) -> bool:
        """Check whether a city is eligible in any county of a state."""
        if state is None or city is None:
            return False
        counties = self._states.get(normalize_key(state))
        if counties is None:
            return False
        target = normalize_city(city)
        return any(normalize_city(c) == target for cities in counties.values() for c in cities)

    def get_eligible_cities_in_county(self, state: str | None, county: str | None) -> list[str]:
        if state is None or county is None:
            return []
        counties = self._states.get(normalize_key(state))
        if counties is None:
            return []
        return list(counties.get(normalize_key(county), ()))

    def get_eligible_states(self) -> list[str]:
        return list(self._states.keys())

    def get_eligible_counties_in_state(self, state: str | None) -> list[str]:
        if state is None:
            return []
        counties = self._states.get(normalize_key(state))
        if counties is None:
            return []
        return list(counties.keys())

    def is_address_eligible(self, city: str | None, county: str | None, state: str | None) -> bool:
        """Check an address by city, optional county and state.

        State abbreviations are expanded to full names before lookup. The
        county narrows the search when given; otherwise every county of the
        state is searched.

        Args:
            city: City name.
            county: County name, or None/blank for a state-wide search.
            state: State name or two-letter abbreviation.

        Returns:
            True when the city is listed as eligible.
        """
        if city is None or state is None:
            logger.debug("City or state is missing, address not eligible")
            return False

        state_key = normalize_state(state)
        if _has_text(county):
            eligible = self.is_city_eligible(state_key, county, city)
            logger.debug(f"Region check with county: city={city}, county={county}, state={state}, eligible={eligible}")
            return eligible

        eligible = self.is_city_eligible_in_state(state_key, city)
        logger.debug(f"Region check without county: city={city}, state={state}, eligible={eligible}")
        return eligible

    def check_eligibility_with_reason(
        self,
        city: str | None,
        county: str | None,
        state: str | None,
    ) -> RegionCheck:
        """Check an address and explain the verdict.

        Args:
            city: City name.
            county: County name, or None/blank.
            state: State name or two-letter abbreviation.

        Returns:
            RegionCheck with the verdict and reason text.
        """
        eligible = self.is_address_eligible(city, county, state)
        with_county = _has_text(county)

        if eligible:
            if with_county:
                reason = f"Address in {city}, {county} County, {state} is in an eligible region"
            else:
                reason = f"Address in {city}, {state} is in an eligible region"
        elif normalize_state(state) not in self._states:
            reason = f"State '{state}' does not have any eligible regions configured"
        elif with_county:
            reason = f"City '{city}' in {county} County, {state} is not in the list of eligible cities"
        else:
            reason = f"City '{city}' in {state} is not in the list of eligible cities"

        return RegionCheck(eligible=eligible, reason=reason)


def _extract_states(document: Any) -> Mapping[str, Any]:
    if not isinstance(document, dict):
        return {}
    root = document.get("eligible-regions", document.get("eligible_regions", document))
    if not isinstance(root, dict):
        return {}
    states = root.get("states") or {}
    if not isinstance(states, dict):
        msg = "'states' must be a mapping of state to counties"
        raise ValueError(msg)
    return states


def parse_regions(document: Any) -> dict[str, dict[str, list[str]]]:
    """Convert a parsed regions document into state → county → cities.

    Accepts the nested ``states: <state>: counties: <county>: cities: [...]``
    layout, optionally under an ``eligible-regions`` root key.

    Raises:
        ValueError: If a level has the wrong shape.
    """
    result: dict[str, dict[str, list[str]]] = {}
    for state, state_config in _extract_states(document).items():
        counties = (state_config or {}).get("counties") or {}
        if not isinstance(counties, dict):
            msg = f"Counties for state '{state}' must be a mapping"
            raise ValueError(msg)
        result[str(state)] = {}
        for county, county_config in counties.items():
            cities = (county_config or {}).get("cities") or []
            if not isinstance(cities, list):
                msg = f"Cities for county '{county}' in state '{state}' must be a list"
                raise ValueError(msg)
            result[str(state)][str(county)] = [str(c) for c in cities]
    return result


def load_region_directory(path: str | Path | None) -> RegionDirectory:
    """Load the region directory from a YAML file.

    A missing path or file yields an empty directory (every check resolves
    to not eligible) rather than an error.

    Args:
        path: Path to the regions YAML file.

    Returns:
        RegionDirectory instance.

    Raises:
        ValueError: If the file is present but malformed.
    """
    if path is None:
        return RegionDirectory({})
    file_path = Path(path)
    if not file_path.exists():
        logger.warning(f"Eligible regions file not found: {file_path}")
        return RegionDirectory({})
    with file_path.open(encoding="utf-8") as f:
        document = yaml.safe_load(f)
    return RegionDirectory(parse_regions(document))

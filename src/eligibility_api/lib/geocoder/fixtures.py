"""Static address fixtures provider.

Resolves addresses from a mapping file instead of a remote API. The same
file format backs the curated preloaded-address directory.

File format (YAML or JSON)::

    "212 encounter bay, alameda, ca 90255":
      street: 212 Encounter Bay
      city: Alameda
      county: Alameda
      state: CA
      zip: "90255"
      eligible: true
"""

import json
from pathlib import Path

import yaml
from loguru import logger

from eligibility_api.lib.geocoder.address import AddressComponents, normalize_lookup_key
from eligibility_api.lib.geocoder.base import BaseGeocoder


def load_address_entries(path: str | Path) -> dict[str, AddressComponents]:
    """Load an address mapping file.

    Keys are normalized with :func:`normalize_lookup_key`; entries whose
    value is not a mapping are skipped with a warning.

    Args:
        path: Path to a ``.json``, ``.yml`` or ``.yaml`` file.

    Returns:
        Dictionary of normalized address key to components.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document root is not a mapping.
    """
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")
    raw = json.loads(text) if file_path.suffix.lower() == ".json" else yaml.safe_load(text)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        msg = f"Address file {file_path} must contain a mapping of address to components"
        raise ValueError(msg)

    entries: dict[str, AddressComponents] = {}
    for address, value in raw.items():
        key = normalize_lookup_key(str(address))
        if not key:
            continue
        if not isinstance(value, dict):
            logger.warning(f"Skipping malformed address entry in {file_path.name}")
            continue
        entries[key] = AddressComponents.from_dict(value)
    return entries


class FixtureGeocoder(BaseGeocoder):
    """Geocoder backed by an in-memory mapping of address to components."""

    def __init__(self, entries: dict[str, AddressComponents]) -> None:
        self._entries = dict(entries)

    @classmethod
    def from_file(cls, path: str | Path) -> "FixtureGeocoder":
        entries = load_address_entries(path)
        logger.info(f"Loaded {len(entries)} address fixtures from {Path(path).name}")
        return cls(entries)

    @property
    def provider_name(self) -> str:
        return "fixtures"

    def __len__(self) -> int:
        return len(self._entries)

    async def geocode(self, address: str) -> AddressComponents | None:
        return self._entries.get(normalize_lookup_key(address))

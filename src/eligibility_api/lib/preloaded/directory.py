"""Curated addresses with pre-verified eligibility verdicts.

Readers see one immutable snapshot; :meth:`PreloadedAddressDirectory.replace`
installs a new snapshot by swapping the reference, never by mutating the
current one, so concurrent readers need no locking.
"""

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from eligibility_api.lib.geocoder.address import AddressComponents, normalize_lookup_key
from eligibility_api.lib.geocoder.fixtures import load_address_entries


class PreloadedAddressDirectory:
    """In-memory address → components directory keyed by normalized text."""

    def __init__(self, entries: Mapping[str, AddressComponents] | None = None) -> None:
        self._snapshot: Mapping[str, AddressComponents] = MappingProxyType({})
        self.replace(entries or {})

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and normalize_lookup_key(address) in self._snapshot

    def lookup(self, address: str | None) -> AddressComponents | None:
        """Find a curated entry by raw address text.

        Args:
            address: Raw address text; normalized before lookup.

        Returns:
            The curated components, or None when the address is not listed.
        """
        key = normalize_lookup_key(address)
        if not key:
            return None
        return self._snapshot.get(key)

    def replace(self, entries: Mapping[str, AddressComponents]) -> None:
        """Install a new snapshot built from ``entries``."""
        snapshot = {normalize_lookup_key(k): v for k, v in entries.items() if normalize_lookup_key(k)}
        self._snapshot = MappingProxyType(snapshot)

    def snapshot(self) -> Mapping[str, AddressComponents]:
        """Return the current read-only snapshot."""
        return self._snapshot


def load_preloaded_directory(path: str | Path | None) -> PreloadedAddressDirectory:
    """Load the curated address directory from a YAML or JSON file.

    A missing path or file yields an empty directory.

    Args:
        path: Path to the address mapping file.

    Returns:
        PreloadedAddressDirectory instance.
    """
    if path is None:
        return PreloadedAddressDirectory()
    file_path = Path(path)
    if not file_path.exists():
        logger.warning(f"Preloaded addresses file not found: {file_path}")
        return PreloadedAddressDirectory()
    entries = load_address_entries(file_path)
    logger.info(f"Loaded {len(entries)} preloaded addresses from {file_path.name}")
    return PreloadedAddressDirectory(entries)

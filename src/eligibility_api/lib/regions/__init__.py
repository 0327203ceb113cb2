"""Region library — static state → county → city eligibility directory.

Public API:
    - RegionDirectory: Immutable query surface over eligible regions
    - RegionCheck: Verdict plus reason text
    - load_region_directory: Build a directory from a YAML file
    - parse_regions: Convert a parsed YAML document into nested mappings
    - normalize_key: State/county key normalization
    - normalize_state: Key normalization with abbreviation expansion
    - STATE_ABBREVIATIONS: Two-letter code → lowercase state name
"""

from eligibility_api.lib.regions.directory import (
    STATE_ABBREVIATIONS,
    RegionCheck,
    RegionDirectory,
    load_region_directory,
    normalize_key,
    normalize_state,
    parse_regions,
)

__all__ = [
    "STATE_ABBREVIATIONS",
    "RegionCheck",
    "RegionDirectory",
    "load_region_directory",
    "normalize_key",
    "normalize_state",
    "parse_regions",
]

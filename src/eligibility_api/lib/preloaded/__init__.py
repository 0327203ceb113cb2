"""Preloaded address library — curated addresses with embedded verdicts.

Public API:
    - PreloadedAddressDirectory: Immutable-snapshot address directory
    - load_preloaded_directory: Build a directory from a YAML/JSON file
"""

from eligibility_api.lib.preloaded.directory import PreloadedAddressDirectory, load_preloaded_directory

__all__ = [
    "PreloadedAddressDirectory",
    "load_preloaded_directory",
]

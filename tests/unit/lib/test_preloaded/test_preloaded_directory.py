"""Unit tests for the preloaded address directory."""

from pathlib import Path

from eligibility_api.lib.geocoder import AddressComponents
from eligibility_api.lib.preloaded import PreloadedAddressDirectory, load_preloaded_directory

ENCOUNTER_BAY = AddressComponents(
    street="212 Encounter Bay",
    city="Alameda",
    county="Alameda",
    state="CA",
    zip="90255",
    eligible=True,
)


class TestPreloadedAddressDirectory:
    """Tests for lookup and snapshot replacement."""

    def test_lookup_is_case_and_whitespace_insensitive(self) -> None:
        directory = PreloadedAddressDirectory({"212 encounter bay, alameda, ca 90255": ENCOUNTER_BAY})
        assert directory.lookup("  212 Encounter Bay, Alameda, CA 90255 ") is ENCOUNTER_BAY

    def test_keys_normalized_on_construction(self) -> None:
        directory = PreloadedAddressDirectory({"212 Encounter Bay, Alameda, CA 90255": ENCOUNTER_BAY})
        assert "212 encounter bay, alameda, ca 90255" in directory
        assert len(directory) == 1

    def test_unknown_and_blank_addresses(self) -> None:
        directory = PreloadedAddressDirectory({"a": ENCOUNTER_BAY})
        assert directory.lookup("b") is None
        assert directory.lookup("") is None
        assert directory.lookup(None) is None

    def test_replace_swaps_snapshot(self) -> None:
        directory = PreloadedAddressDirectory({"a": ENCOUNTER_BAY})
        before = directory.snapshot()
        directory.replace({"b": ENCOUNTER_BAY})
        assert "a" in before
        assert directory.lookup("a") is None
        assert directory.lookup("b") is ENCOUNTER_BAY

    def test_contains_rejects_non_strings(self) -> None:
        assert 42 not in PreloadedAddressDirectory({"a": ENCOUNTER_BAY})


class TestLoadPreloadedDirectory:
    """Tests for loading the curated address file."""

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "preloaded.yml"
        path.write_text(
            '"212 encounter bay, alameda, ca 90255":\n'
            "  street: 212 Encounter Bay\n"
            "  city: Alameda\n"
            "  county: Alameda\n"
            "  state: CA\n"
            '  zip: "90255"\n'
            "  eligible: true\n",
            encoding="utf-8",
        )
        directory = load_preloaded_directory(path)
        entry = directory.lookup("212 Encounter Bay, Alameda, CA 90255")
        assert entry is not None
        assert entry.eligible is True
        assert entry.county == "Alameda"
        assert entry.zip == "90255"

    def test_load_json(self, tmp_path: Path) -> None:
        path = tmp_path / "preloaded.json"
        path.write_text('{"1 Main St": {"city": "Reno", "state": "NV", "eligible": "false"}}', encoding="utf-8")
        entry = load_preloaded_directory(path).lookup("1 main st")
        assert entry is not None
        assert entry.eligible is False

    def test_missing_file(self, tmp_path: Path) -> None:
        assert len(load_preloaded_directory(tmp_path / "nope.yml")) == 0

    def test_none_path(self) -> None:
        assert len(load_preloaded_directory(None)) == 0

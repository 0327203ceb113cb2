"""Unit tests for address keys, formatting and AddressComponents."""

from eligibility_api.lib.geocoder import AddressComponents, build_cache_key, format_address, normalize_lookup_key


class TestBuildCacheKey:
    """Tests for the eligibility cache key."""

    def test_lowercased_join(self) -> None:
        assert build_cache_key("123 Main St", "Chicago", "IL", "60601") == "123 main st:chicago:il:60601"

    def test_parts_trimmed(self) -> None:
        assert build_cache_key(" 123 Main St ", "Chicago ", " IL", "60601") == "123 main st:chicago:il:60601"

    def test_case_variants_collide(self) -> None:
        assert build_cache_key("123 MAIN ST", "CHICAGO", "il", "60601") == build_cache_key(
            "123 main st", "chicago", "IL", "60601"
        )

    def test_different_zip_differs(self) -> None:
        assert build_cache_key("123 Main St", "Chicago", "IL", "60601") != build_cache_key(
            "123 Main St", "Chicago", "IL", "60602"
        )

    def test_none_parts(self) -> None:
        assert build_cache_key("1 Main St, Reno", None, None, None) == "1 main st, reno:::"


class TestNormalizeLookupKey:
    def test_normalizes(self) -> None:
        assert normalize_lookup_key("  212 Encounter Bay  ") == "212 encounter bay"

    def test_blank(self) -> None:
        assert normalize_lookup_key(None) == ""
        assert normalize_lookup_key("") == ""


class TestFormatAddress:
    """Tests for the display line."""

    def test_full_address(self) -> None:
        line = format_address(
            street_address="123 Main St",
            street_address_2="Apt 4",
            city="Chicago",
            state="IL",
            zip_code="60601",
            country="USA",
        )
        assert line == "123 Main St, Apt 4, Chicago, IL 60601, USA"

    def test_without_optional_parts(self) -> None:
        line = format_address(street_address="123 Main St", city="Chicago", state="IL", zip_code="60601")
        assert line == "123 Main St, Chicago, IL 60601"


class TestAddressComponents:
    """Tests for AddressComponents conversions."""

    def test_to_dict_omits_none_and_lowercases_bools(self) -> None:
        components = AddressComponents(city="Alameda", state="CA", eligible=True, latitude=37.5)
        assert components.to_dict() == {"city": "Alameda", "state": "CA", "latitude": "37.5", "eligible": "true"}

    def test_from_dict_parses_strings(self) -> None:
        components = AddressComponents.from_dict(
            {"city": "Alameda", "zip": 90255, "latitude": "37.5", "longitude": "", "eligible": "true", "other": 1}
        )
        assert components.zip == "90255"
        assert components.latitude == 37.5
        assert components.longitude is None
        assert components.eligible is True

    def test_from_dict_zip_aliases(self) -> None:
        assert AddressComponents.from_dict({"zip_code": "60601"}).zip == "60601"
        assert AddressComponents.from_dict({"postal_code": "60602"}).zip == "60602"

    def test_dict_round_trip(self) -> None:
        components = AddressComponents(street="1 Main St", city="Reno", state="NV", zip="89501", eligible=False)
        assert AddressComponents.from_dict(components.to_dict()) == components

    def test_is_empty(self) -> None:
        assert AddressComponents().is_empty is True
        assert AddressComponents(city="Reno").is_empty is False

    def test_formatted(self) -> None:
        components = AddressComponents(street="212 Encounter Bay", city="Alameda", state="CA", zip="90255")
        assert components.formatted() == "212 Encounter Bay, Alameda, CA 90255"

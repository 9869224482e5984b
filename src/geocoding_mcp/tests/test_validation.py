"""Tests for request validation.

Validates:
- Per-mode required fields and their exact messages
- latlng format and range boundaries
- Common language/region checks and their ordering
- Failures are values, never exceptions
"""

from __future__ import annotations

import pytest

from geocoding_mcp.geocoding import (
    ForwardRequest,
    PlaceRequest,
    ReverseRequest,
    ValidationReason,
    is_valid_latlng,
    parse_latlng,
    validate,
)


def _reason(request: ForwardRequest | ReverseRequest | PlaceRequest) -> ValidationReason:
    return validate(request).unwrap_err().reason


# âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ
# Forward
# âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ


class TestForward:
    @pytest.mark.parametrize("address", [None, "", "   ", "\t\n"])
    def test_missing_or_blank_address(self, address: str | None) -> None:
        failure = validate(ForwardRequest(address=address)).unwrap_err()
        assert failure.reason is ValidationReason.ADDRESS_REQUIRED
        assert failure.field == "address"
        assert failure.message == "Address is required."

    def test_address_length_limit(self) -> None:
        assert validate(ForwardRequest(address="a" * 2048)).is_ok()

        failure = validate(ForwardRequest(address="a" * 2049)).unwrap_err()
        assert failure.reason is ValidationReason.ADDRESS_TOO_LONG
        assert failure.message == "Address must be less than 2048 characters."

    def test_valid_request_is_returned_unchanged(self) -> None:
        request = ForwardRequest(address="1600 Amphitheatre Parkway, Mountain View, CA", language="en-US")
        assert validate(request).unwrap() is request

    def test_address_checked_before_common_filters(self) -> None:
        assert _reason(ForwardRequest(address="", language="english")) is ValidationReason.ADDRESS_REQUIRED


# âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ
# Reverse
# âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ


class TestReverse:
    @pytest.mark.parametrize("latlng", [None, ""])
    def test_missing_latlng(self, latlng: str | None) -> None:
        failure = validate(ReverseRequest(latlng=latlng)).unwrap_err()
        assert failure.reason is ValidationReason.LATLNG_REQUIRED
        assert failure.message == "Latlng is required."

    @pytest.mark.parametrize("latlng", ["0,0", "37.4224764,-122.0842499", "90,180", "-90,-180", " 40.7 , -73.9 ", "+1.5,.5"])
    def test_valid_coordinates(self, latlng: str) -> None:
        assert validate(ReverseRequest(latlng=latlng)).is_ok()

    @pytest.mark.parametrize(
        "latlng",
        [
            "91,0",
            "-91,0",
            "0,181",
            "0,-181",
            "abc,def",
            "a,b",
            "1,2,3",
            "٤٠,٣",
            "١,٢",
            "37.4224764",
            "37.4224764,",
            ",122.0842499",
            "37.4224764,-122.0842499,extra",
            "nan,0",
            "inf,0",
            "1e1,0",
            "12abc,3",
            "   ",
        ],
    )
    def test_invalid_coordinates(self, latlng: str) -> None:
        failure = validate(ReverseRequest(latlng=latlng)).unwrap_err()
        assert failure.reason is ValidationReason.LATLNG_INVALID
        assert failure.message == 'Invalid latlng format. Expected: "latitude,longitude"'


class TestLatLngParsing:
    def test_parse_trims_and_converts(self) -> None:
        assert parse_latlng(" 40.714224 ,-73.961452") == (40.714224, -73.961452)

    def test_boundaries_are_inclusive(self) -> None:
        assert is_valid_latlng("90,-180")
        assert is_valid_latlng("-90.0,180.0")
        assert not is_valid_latlng("90.0001,0")
        assert not is_valid_latlng("0,-180.0001")


# âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ
# Place
# âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ


class TestPlace:
    @pytest.mark.parametrize("place_id", [None, ""])
    def test_missing_place_id(self, place_id: str | None) -> None:
        failure = validate(PlaceRequest(place_id=place_id)).unwrap_err()
        assert failure.reason is ValidationReason.PLACE_ID_REQUIRED
        assert failure.message == "Place ID is required."

    @pytest.mark.parametrize("place_id", ["invalid_place_id", "chij123", "EiQ2MDAgQnJvYWR3YXk"])
    def test_place_id_without_prefix(self, place_id: str) -> None:
        failure = validate(PlaceRequest(place_id=place_id)).unwrap_err()
        assert failure.reason is ValidationReason.PLACE_ID_INVALID
        assert failure.message == 'Invalid Place ID format. Must start with "ChIJ".'

    def test_valid_place_id(self) -> None:
        assert validate(PlaceRequest(place_id="ChIJd8BlQ2BZwokRAFUEcm_qrcA")).is_ok()


# âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ
# Common filters
# âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ


class TestCommonFilters:
    @pytest.mark.parametrize("language", ["en", "fr", "en-US", "pt-BR"])
    def test_valid_language(self, language: str) -> None:
        assert validate(ForwardRequest(address="Paris", language=language)).is_ok()

    @pytest.mark.parametrize("language", ["invalid-lang", "EN", "english", "en-us", "en_US", "e"])
    def test_invalid_language(self, language: str) -> None:
        failure = validate(ReverseRequest(latlng="0,0", language=language)).unwrap_err()
        assert failure.reason is ValidationReason.LANGUAGE_INVALID
        assert failure.message == 'Invalid language format. Expected: "en", "en-US", etc.'

    @pytest.mark.parametrize("region", ["USA", "US", "usa", "u", "u1"])
    def test_invalid_region(self, region: str) -> None:
        failure = validate(PlaceRequest(place_id="ChIJabc", region=region)).unwrap_err()
        assert failure.reason is ValidationReason.REGION_INVALID
        assert failure.message == 'Invalid region format. Expected: "us", "uk", etc.'

    def test_language_checked_before_region(self) -> None:
        assert _reason(ForwardRequest(address="Paris", language="xx-yy", region="FRA")) is ValidationReason.LANGUAGE_INVALID

    def test_empty_filters_count_as_absent(self) -> None:
        assert validate(ForwardRequest(address="Paris", language="", region="")).is_ok()


def test_validation_is_deterministic() -> None:
    request = ReverseRequest(latlng="91,0", language="bad")
    assert validate(request) == validate(request)
    assert _reason(request) is ValidationReason.LATLNG_INVALID

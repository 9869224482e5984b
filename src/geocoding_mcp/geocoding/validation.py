"""Parameter validation for geocoding requests.

Pure functions returning `Result[request, ValidationFailure]`; malformed input
is a failure value, never an exception. Rules run in a fixed order per
variant and the first failing rule wins. The common filters (language,
region) are checked only after the variant-specific rules pass.
"""

from __future__ import annotations

import math
import re
from enum import StrEnum
from typing import TypeAlias, TypeVar

from pydantic import BaseModel, ConfigDict, computed_field

from geocoding_mcp.foundation.errors import Err, Ok, Result

from .requests import CommonFilters, ForwardRequest, PlaceRequest, ReverseRequest

MAX_ADDRESS_LENGTH = 2048
# Heuristic policy: most place ids start with this prefix, but the upstream
# service does not guarantee it.
PLACE_ID_PREFIX = "ChIJ"

_LANGUAGE = re.compile(r"[a-z]{2}(-[A-Z]{2})?")
_REGION = re.compile(r"[a-z]{2}")
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)")

R = TypeVar("R", bound=CommonFilters)


class ValidationReason(StrEnum):
    """Why a request was rejected. Each reason carries a fixed message."""

    ADDRESS_REQUIRED = "address_required"
    ADDRESS_TOO_LONG = "address_too_long"
    LATLNG_REQUIRED = "latlng_required"
    LATLNG_INVALID = "latlng_invalid"
    PLACE_ID_REQUIRED = "place_id_required"
    PLACE_ID_INVALID = "place_id_invalid"
    LANGUAGE_INVALID = "language_invalid"
    REGION_INVALID = "region_invalid"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES: dict[ValidationReason, str] = {
    ValidationReason.ADDRESS_REQUIRED: "Address is required.",
    ValidationReason.ADDRESS_TOO_LONG: f"Address must be less than {MAX_ADDRESS_LENGTH} characters.",
    ValidationReason.LATLNG_REQUIRED: "Latlng is required.",
    ValidationReason.LATLNG_INVALID: 'Invalid latlng format. Expected: "latitude,longitude"',
    ValidationReason.PLACE_ID_REQUIRED: "Place ID is required.",
    ValidationReason.PLACE_ID_INVALID: f'Invalid Place ID format. Must start with "{PLACE_ID_PREFIX}".',
    ValidationReason.LANGUAGE_INVALID: 'Invalid language format. Expected: "en", "en-US", etc.',
    ValidationReason.REGION_INVALID: 'Invalid region format. Expected: "us", "uk", etc.',
}


class ValidationFailure(BaseModel):
    """A rejected request: the reason code and the offending field."""

    model_config = ConfigDict(frozen=True)

    reason: ValidationReason
    field: str

    @computed_field
    @property
    def message(self) -> str:
        return self.reason.message


ValidationResult: TypeAlias = Result[ForwardRequest | ReverseRequest | PlaceRequest, ValidationFailure]


def _fail(reason: ValidationReason, field: str) -> Result[R, ValidationFailure]:
    return Err(ValidationFailure(reason=reason, field=field))


# ─────────────────────────────────────────────────────────────────────────────
# Coordinates
# ─────────────────────────────────────────────────────────────────────────────


def parse_latlng(latlng: str) -> tuple[float, float] | None:
    """Parse "latitude,longitude" into a coordinate pair, or None if malformed.

    Exactly two comma-separated parts, each a finite decimal number after
    trimming whitespace, latitude in [-90, 90] and longitude in [-180, 180].
    """
    parts = latlng.split(",")
    if len(parts) != 2:
        return None
    coords: list[float] = []
    for part in parts:
        text = part.strip()
        if not _DECIMAL.fullmatch(text):
            return None
        value = float(text)
        if not math.isfinite(value):
            return None
        coords.append(value)
    lat, lng = coords
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return lat, lng


def is_valid_latlng(latlng: str) -> bool:
    return parse_latlng(latlng) is not None


# ─────────────────────────────────────────────────────────────────────────────
# Per-variant rules
# ─────────────────────────────────────────────────────────────────────────────


def validate_forward(request: ForwardRequest) -> Result[ForwardRequest, ValidationFailure]:
    if request.address is None or not request.address.strip():
        return _fail(ValidationReason.ADDRESS_REQUIRED, "address")
    if len(request.address) > MAX_ADDRESS_LENGTH:
        return _fail(ValidationReason.ADDRESS_TOO_LONG, "address")
    return Ok(request)


def validate_reverse(request: ReverseRequest) -> Result[ReverseRequest, ValidationFailure]:
    if not request.latlng:
        return _fail(ValidationReason.LATLNG_REQUIRED, "latlng")
    if not is_valid_latlng(request.latlng):
        return _fail(ValidationReason.LATLNG_INVALID, "latlng")
    return Ok(request)


def validate_place(request: PlaceRequest) -> Result[PlaceRequest, ValidationFailure]:
    if not request.place_id:
        return _fail(ValidationReason.PLACE_ID_REQUIRED, "place_id")
    if not request.place_id.startswith(PLACE_ID_PREFIX):
        return _fail(ValidationReason.PLACE_ID_INVALID, "place_id")
    return Ok(request)


def validate_common(request: R) -> Result[R, ValidationFailure]:
    """Language then region. Empty strings count as absent."""
    if request.language and not _LANGUAGE.fullmatch(request.language):
        return _fail(ValidationReason.LANGUAGE_INVALID, "language")
    if request.region and not _REGION.fullmatch(request.region):
        return _fail(ValidationReason.REGION_INVALID, "region")
    return Ok(request)


def validate(request: ForwardRequest | ReverseRequest | PlaceRequest) -> ValidationResult:
    """Validate a request of any variant.

    Deterministic: the same input always yields the same failure reason.
    """
    match request:
        case ForwardRequest():
            checked = validate_forward(request)
        case ReverseRequest():
            checked = validate_reverse(request)
        case PlaceRequest():
            checked = validate_place(request)
        case _:
            raise TypeError(f"Unsupported request type: {type(request).__name__}")
    return checked.flat_map(validate_common)

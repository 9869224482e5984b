"""Logical geocoding requests: a tagged union on `mode`.

Three variants share the CommonFilters fields. The variant's identifying
field (address, latlng, place_id) is optional at the type level so that a
missing value reaches the validator and becomes a failure value instead of
a schema error.
"""

from __future__ import annotations

from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

GeocodeMode: TypeAlias = Literal["forward", "reverse", "place"]


class LatLngLiteral(BaseModel):
    """A single coordinate pair."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    lat: float
    lng: float


class Bounds(BaseModel):
    """Rectangular viewport given by its northeast and southwest corners."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    northeast: LatLngLiteral
    southwest: LatLngLiteral


class Components(BaseModel):
    """Component filters for forward geocoding.

    The five named filters are advertised; other upstream filter names are
    accepted and passed through.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    country: str | None = Field(default=None, description='Country code (e.g., "US")')
    postal_code: str | None = Field(default=None, description="Postal code")
    route: str | None = Field(default=None, description="Route name")
    locality: str | None = Field(default=None, description="City name")
    administrative_area: str | None = Field(default=None, description="State/province")

    def as_filters(self) -> dict[str, str]:
        """Set filters only, in declaration order."""
        return {k: str(v) for k, v in self.model_dump(exclude_none=True).items() if v != ""}


class CommonFilters(BaseModel):
    """Filters accepted by every request variant."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    language: str | None = None
    region: str | None = None
    result_type: list[str] | None = None
    location_type: list[str] | None = None


class ForwardRequest(CommonFilters):
    """Address -> coordinates."""

    mode: Literal["forward"] = "forward"
    address: str | None = None
    components: Components | None = None
    bounds: Bounds | None = None


class ReverseRequest(CommonFilters):
    """Coordinates ("latitude,longitude") -> address."""

    mode: Literal["reverse"] = "reverse"
    latlng: str | None = None


class PlaceRequest(CommonFilters):
    """Place id -> address."""

    mode: Literal["place"] = "place"
    place_id: str | None = None


GeocodeRequest: TypeAlias = Annotated[
    ForwardRequest | ReverseRequest | PlaceRequest,
    Field(discriminator="mode"),
]

_RequestAdapter: TypeAdapter[GeocodeRequest] = TypeAdapter(GeocodeRequest)


def parse_request(data: dict[str, object]) -> ForwardRequest | ReverseRequest | PlaceRequest:
    """Validate a raw argument mapping (carrying `mode`) into its request variant.

    Raises:
        pydantic.ValidationError: unknown mode or wrongly typed fields
    """
    return _RequestAdapter.validate_python(data)

"""Geocoding tools: the tool-call surface over GeocodingService.

Four tools share one service:

- geocode_forward: address -> coordinates
- geocode_reverse: "latitude,longitude" -> address
- geocode_place: place id -> address
- geocode: any of the above, selected by `mode`

Each returns the normalized GeocodeResponse as pretty-printed JSON. Geocoding
failures (bad input, upstream errors, network faults) are part of that JSON,
not tool errors.

Example:
    >>> service = GeocodingService(load_settings())
    >>> tool = ForwardGeocodeTool(service)
    >>> print(await tool.acall(address="1600 Amphitheatre Parkway, Mountain View, CA"))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from geocoding_mcp.foundation.core import BaseTool, ToolMetadata, TParams
from geocoding_mcp.foundation.registry import ToolRegistry
from geocoding_mcp.geocoding import (
    Bounds,
    Components,
    ForwardRequest,
    GeocodeMode,
    PlaceRequest,
    ReverseRequest,
    parse_request,
)

if TYPE_CHECKING:
    from geocoding_mcp.geocoding import GeocodingService


# ─────────────────────────────────────────────────────────────────────────────
# Parameters
# ─────────────────────────────────────────────────────────────────────────────


class FilterParams(BaseModel):
    """Filters shared by every geocoding tool."""

    model_config = ConfigDict(extra="ignore")

    language: str | None = Field(
        default=None,
        description='Language for results (optional). Example: "en", "es", "fr"',
    )
    region: str | None = Field(
        default=None,
        description='Region bias using ccTLD format (optional). Example: "us", "uk", "au"',
    )
    result_type: list[str] | None = Field(
        default=None,
        description='Filter results by type (optional). Examples: ["street_address"], ["political"]',
    )
    location_type: list[str] | None = Field(
        default=None,
        description='Filter by location precision (optional). Examples: ["ROOFTOP"], ["RANGE_INTERPOLATED"]',
    )


_ADDRESS = 'Address to geocode. Example: "1600 Amphitheatre Parkway, Mountain View, CA"'
_LATLNG = 'Latitude,longitude coordinates. Example: "40.714224,-73.961452"'
_PLACE_ID = 'Google Place ID. Example: "ChIJd8BlQ2BZwokRAFUEcm_qrcA"'
_COMPONENTS = "Component filtering for forward geocoding (optional)"
_BOUNDS = "Viewport bounds for biasing results (optional)"


class ForwardGeocodeParams(FilterParams):
    """Parameters for geocode_forward."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"examples": [{"address": "1600 Amphitheatre Parkway, Mountain View, CA"}]},
    )

    address: str | None = Field(default=None, description=_ADDRESS)
    components: Components | None = Field(default=None, description=_COMPONENTS)
    bounds: Bounds | None = Field(default=None, description=_BOUNDS)

    def to_request(self) -> ForwardRequest:
        return ForwardRequest(**self.model_dump(exclude_none=True))


class ReverseGeocodeParams(FilterParams):
    """Parameters for geocode_reverse."""

    latlng: str | None = Field(default=None, description=_LATLNG)

    def to_request(self) -> ReverseRequest:
        return ReverseRequest(**self.model_dump(exclude_none=True))


class PlaceGeocodeParams(FilterParams):
    """Parameters for geocode_place."""

    place_id: str | None = Field(default=None, description=_PLACE_ID)

    def to_request(self) -> PlaceRequest:
        return PlaceRequest(**self.model_dump(exclude_none=True))


class GeocodeParams(FilterParams):
    """Parameters for the unified geocode tool. `mode` picks the lookup."""

    mode: GeocodeMode = Field(
        ...,
        description=(
            'Geocoding mode: "forward" (address to coordinates), "reverse" (coordinates to address), '
            'or "place" (Place ID to address)'
        ),
    )
    address: str | None = Field(default=None, description=f"{_ADDRESS} (required for forward mode)")
    latlng: str | None = Field(default=None, description=f"{_LATLNG} (required for reverse mode)")
    place_id: str | None = Field(default=None, description=f"{_PLACE_ID} (required for place mode)")
    components: Components | None = Field(default=None, description=_COMPONENTS)
    bounds: Bounds | None = Field(default=None, description=_BOUNDS)

    def to_request(self) -> ForwardRequest | ReverseRequest | PlaceRequest:
        # Fields foreign to the selected mode are dropped by the request model
        return parse_request(self.model_dump(exclude_none=True))


# ─────────────────────────────────────────────────────────────────────────────
# Tools
# ─────────────────────────────────────────────────────────────────────────────


class GeocodingTool(BaseTool[TParams]):
    """Shared execution for geocoding tools: params -> request -> service -> JSON."""

    def __init__(self, service: GeocodingService) -> None:
        self.service = service

    def _run(self, params: TParams) -> str:
        return self._run_async_sync(self._async_run(params))

    async def _async_run(self, params: TParams) -> str:
        response = await self.service.geocode(params.to_request())  # type: ignore[attr-defined]
        return response.to_json()


class ForwardGeocodeTool(GeocodingTool[ForwardGeocodeParams]):
    metadata: ClassVar[ToolMetadata] = ToolMetadata(
        name="geocode_forward",
        description=(
            "Convert an address to geographic coordinates using Google Maps. "
            "Supports component filtering, viewport bounds, language and region bias."
        ),
        category="geocoding",
        requires_api_key=True,
    )
    params_schema: ClassVar[type[ForwardGeocodeParams]] = ForwardGeocodeParams


class ReverseGeocodeTool(GeocodingTool[ReverseGeocodeParams]):
    metadata: ClassVar[ToolMetadata] = ToolMetadata(
        name="geocode_reverse",
        description='Convert "latitude,longitude" coordinates to a human-readable address using Google Maps.',
        category="geocoding",
        requires_api_key=True,
    )
    params_schema: ClassVar[type[ReverseGeocodeParams]] = ReverseGeocodeParams


class PlaceGeocodeTool(GeocodingTool[PlaceGeocodeParams]):
    metadata: ClassVar[ToolMetadata] = ToolMetadata(
        name="geocode_place",
        description="Look up the address and coordinates of a Google Place ID using Google Maps.",
        category="geocoding",
        requires_api_key=True,
    )
    params_schema: ClassVar[type[PlaceGeocodeParams]] = PlaceGeocodeParams


class GeocodeTool(GeocodingTool[GeocodeParams]):
    metadata: ClassVar[ToolMetadata] = ToolMetadata(
        name="geocode",
        description=(
            "Geocode addresses, coordinates, or place IDs using Google Maps API. "
            "Supports forward geocoding (address to coordinates), reverse geocoding "
            "(coordinates to address), and place geocoding (Place ID to address)."
        ),
        category="geocoding",
        requires_api_key=True,
    )
    params_schema: ClassVar[type[GeocodeParams]] = GeocodeParams


def geocoding_tools(service: GeocodingService) -> tuple[GeocodingTool[BaseModel], ...]:
    """All geocoding tools bound to one service."""
    return (
        ForwardGeocodeTool(service),
        ReverseGeocodeTool(service),
        PlaceGeocodeTool(service),
        GeocodeTool(service),
    )


def build_registry(service: GeocodingService) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register_all(*geocoding_tools(service))
    return registry

"""Request builder: validated request -> upstream operation + parameter set.

Pure mapping, no I/O. Absent, None, empty-string and empty-collection values
are dropped so they never appear on the wire.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from .requests import ForwardRequest, PlaceRequest, ReverseRequest

if TYPE_CHECKING:
    from geocoding_mcp.foundation.config import GeocodingSettings


class UpstreamOperation(StrEnum):
    """Upstream client methods. Place lookups go through reverse geocoding."""

    GEOCODE = "geocode"
    REVERSE_GEOCODE = "reverse_geocode"


class UpstreamRequest(BaseModel):
    """Operation, parameter set and timeout for one upstream call."""

    model_config = ConfigDict(frozen=True)

    operation: UpstreamOperation
    params: dict[str, Any] = Field(repr=False)
    timeout_ms: int

    def masked_params(self) -> dict[str, Any]:
        """Parameters with the API key masked, safe for logs and metadata."""
        return {k: _mask_key(v) if k == "key" else v for k, v in self.params.items()}


def _mask_key(secret: str) -> str:
    return f"{secret[:4]}..." if len(secret) > 4 else "***"


def _compact(params: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None and v != "" and v != [] and v != {}}


def build_request(
    request: ForwardRequest | ReverseRequest | PlaceRequest,
    settings: GeocodingSettings,
) -> UpstreamRequest:
    """Map a validated request to its upstream call.

    Language falls back to the configured default for every mode. Region falls
    back to the configured default only for forward geocoding; reverse and
    place lookups send a region only when the caller supplied one.
    """
    language = request.language or settings.default_language
    filters = {"result_type": request.result_type, "location_type": request.location_type}
    key = settings.api_key.get_secret_value()

    match request:
        case ForwardRequest():
            operation = UpstreamOperation.GEOCODE
            params = {
                "address": request.address,
                "key": key,
                "language": language,
                "region": request.region or settings.default_region,
                "components": request.components.as_filters() if request.components else None,
                "bounds": request.bounds.model_dump() if request.bounds else None,
                **filters,
            }
        case ReverseRequest():
            operation = UpstreamOperation.REVERSE_GEOCODE
            params = {"latlng": request.latlng, "key": key, "language": language, "region": request.region, **filters}
        case PlaceRequest():
            operation = UpstreamOperation.REVERSE_GEOCODE
            params = {"place_id": request.place_id, "key": key, "language": language, "region": request.region, **filters}
        case _:
            raise TypeError(f"Unsupported request type: {type(request).__name__}")

    return UpstreamRequest(operation=operation, params=_compact(params), timeout_ms=settings.timeout)

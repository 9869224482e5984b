"""Geocoding core: request model, validation, request building, upstream client, normalization."""

from .builder import UpstreamOperation, UpstreamRequest, build_request
from .client import GEOCODE_URL, GeocodingClient, UpstreamError, encode_params
from .requests import (
    Bounds,
    CommonFilters,
    Components,
    ForwardRequest,
    GeocodeMode,
    GeocodeRequest,
    LatLngLiteral,
    PlaceRequest,
    ReverseRequest,
    parse_request,
)
from .response import GeocodeResponse, ResponseMetadata, UpstreamStatus
from .service import GeocodingService
from .validation import (
    MAX_ADDRESS_LENGTH,
    PLACE_ID_PREFIX,
    ValidationFailure,
    ValidationReason,
    is_valid_latlng,
    parse_latlng,
    validate,
)

__all__ = [
    # Requests
    "GeocodeMode", "GeocodeRequest", "ForwardRequest", "ReverseRequest", "PlaceRequest",
    "CommonFilters", "Components", "Bounds", "LatLngLiteral", "parse_request",
    # Validation
    "validate", "ValidationFailure", "ValidationReason", "is_valid_latlng", "parse_latlng",
    "MAX_ADDRESS_LENGTH", "PLACE_ID_PREFIX",
    # Building / upstream
    "build_request", "UpstreamOperation", "UpstreamRequest",
    "GeocodingClient", "UpstreamError", "encode_params", "GEOCODE_URL",
    # Responses
    "GeocodeResponse", "ResponseMetadata", "UpstreamStatus",
    # Service
    "GeocodingService",
]

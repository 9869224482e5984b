"""Geocoding tools exposed to LLM tool-calling clients."""

from .geocode import (
    FilterParams,
    ForwardGeocodeParams,
    ForwardGeocodeTool,
    GeocodeParams,
    GeocodeTool,
    GeocodingTool,
    PlaceGeocodeParams,
    PlaceGeocodeTool,
    ReverseGeocodeParams,
    ReverseGeocodeTool,
    build_registry,
    geocoding_tools,
)

__all__ = [
    "GeocodingTool", "ForwardGeocodeTool", "ReverseGeocodeTool", "PlaceGeocodeTool", "GeocodeTool",
    "FilterParams", "ForwardGeocodeParams", "ReverseGeocodeParams", "PlaceGeocodeParams", "GeocodeParams",
    "geocoding_tools", "build_registry",
]

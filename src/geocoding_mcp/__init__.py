"""geocoding-mcp - Google Maps geocoding tools for LLM tool-calling clients.

Forward (address -> coordinates), reverse (coordinates -> address) and place
(place id -> address) geocoding exposed as MCP tools. Every outcome, including
bad input and upstream failures, comes back as one normalized JSON response.

Quick Start:
    >>> from geocoding_mcp import GeocodingService, ForwardRequest, load_settings
    >>>
    >>> service = GeocodingService(load_settings())   # reads GOOGLE_MAPS_API_KEY
    >>> response = await service.geocode(ForwardRequest(address="10 Downing St, London"))
    >>> response.status
    'OK'

As an MCP server:
    $ GOOGLE_MAPS_API_KEY=... geocoding-mcp
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Config
    "GeocodingSettings", "ConfigError", "load_settings",
    # Geocoding
    "GeocodingService", "GeocodingClient", "GeocodeResponse",
    "ForwardRequest", "ReverseRequest", "PlaceRequest", "validate", "build_request",
    # Tools
    "build_registry", "ToolRegistry",
    # Observability
    "configure_logging", "get_logger",
]


def __getattr__(name: str):
    """Lazy imports keep `import geocoding_mcp` cheap."""
    if name in ("GeocodingSettings", "ConfigError", "load_settings"):
        from .foundation import config
        return getattr(config, name)

    if name in ("GeocodingService", "GeocodingClient", "GeocodeResponse",
                "ForwardRequest", "ReverseRequest", "PlaceRequest", "validate", "build_request"):
        from . import geocoding
        return getattr(geocoding, name)

    if name == "build_registry":
        from .tools import build_registry
        return build_registry

    if name == "ToolRegistry":
        from .foundation.registry import ToolRegistry
        return ToolRegistry

    if name in ("configure_logging", "get_logger"):
        from .runtime import observability
        return getattr(observability, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

"""Upstream client for the Google Maps Geocoding endpoint.

Serializes a parameter set into the endpoint's query-string format and
performs the HTTP call with httpx. Non-2xx responses raise UpstreamError
carrying the decoded JSON body when there is one; transport faults propagate
as httpx exceptions.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import httpx
import orjson

from .builder import UpstreamOperation, UpstreamRequest

if TYPE_CHECKING:
    from geocoding_mcp.foundation.errors import JsonDict

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
USER_AGENT = "geocoding-mcp/0.1"


class UpstreamError(Exception):
    """The upstream service answered, but not with a usable success body.

    Attributes:
        status_code: HTTP status, None if the failure was in the body itself
        payload: JSON object body of the error response, if any
    """

    def __init__(self, message: str, *, status_code: int | None = None, payload: JsonDict | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


# ─────────────────────────────────────────────────────────────────────────────
# Wire Encoding
# ─────────────────────────────────────────────────────────────────────────────


def _encode_components(components: dict[str, str]) -> str:
    return "|".join(f"{k}:{v}" for k, v in components.items())


def _encode_bounds(bounds: dict[str, dict[str, float]]) -> str:
    sw, ne = bounds["southwest"], bounds["northeast"]
    return f"{sw['lat']},{sw['lng']}|{ne['lat']},{ne['lng']}"


def encode_params(params: dict[str, Any]) -> dict[str, str]:
    """Flatten structured parameters into query-string values.

    components -> "country:US|locality:Paris", bounds -> "swLat,swLng|neLat,neLng",
    sequences -> "|"-joined. Scalars are stringified.
    """
    encoded: dict[str, str] = {}
    for name, value in params.items():
        match name, value:
            case "components", dict():
                encoded[name] = _encode_components(value)
            case "bounds", dict():
                encoded[name] = _encode_bounds(value)
            case _, list() | tuple():
                encoded[name] = "|".join(str(v) for v in value)
            case _:
                encoded[name] = str(value)
    return encoded


# ─────────────────────────────────────────────────────────────────────────────
# Client
# ─────────────────────────────────────────────────────────────────────────────


class GeocodingClient:
    """Async client for the geocoding endpoint. One instance per process.

    The underlying httpx.AsyncClient is created on first use and closed by
    `aclose()`. Its connection pool belongs to the event loop that created it,
    so a call from a different loop (each sync tool call runs its own) gets a
    fresh client. Pass `transport` to substitute the network (tests use
    httpx.MockTransport).
    """

    def __init__(self, base_url: str = GEOCODE_URL, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.base_url = base_url
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        loop = asyncio.get_running_loop()
        if self._client is not None and self._loop is not loop:
            # Pooled connections are bound to the old loop, which may be closed
            self._client = None
        if self._client is None:
            self._client = httpx.AsyncClient(transport=self._transport, headers={"User-Agent": USER_AGENT})
            self._loop = loop
        return self._client

    async def aclose(self) -> None:
        client, self._client, self._loop = self._client, None, None
        if client is not None:
            await client.aclose()

    async def execute(self, request: UpstreamRequest) -> JsonDict:
        """Dispatch on the request's operation."""
        match request.operation:
            case UpstreamOperation.GEOCODE:
                return await self.geocode(request.params, timeout_ms=request.timeout_ms)
            case UpstreamOperation.REVERSE_GEOCODE:
                return await self.reverse_geocode(request.params, timeout_ms=request.timeout_ms)
        raise ValueError(f"Unknown upstream operation: {request.operation}")

    async def geocode(self, params: dict[str, Any], *, timeout_ms: int) -> JsonDict:
        return await self._get(params, timeout_ms)

    async def reverse_geocode(self, params: dict[str, Any], *, timeout_ms: int) -> JsonDict:
        # Same endpoint: latlng or place_id selects reverse lookup
        return await self._get(params, timeout_ms)

    async def _get(self, params: dict[str, Any], timeout_ms: int) -> JsonDict:
        client = await self._get_client()
        response = await client.get(self.base_url, params=encode_params(params), timeout=timeout_ms / 1000)

        if not response.is_success:
            raise UpstreamError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
                payload=_json_object(response.content),
            )

        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise UpstreamError(f"Invalid JSON in upstream response: {e}", status_code=response.status_code) from e
        if not isinstance(body, dict):
            raise UpstreamError("Unexpected upstream response: expected a JSON object", status_code=response.status_code)
        return body


def _json_object(content: bytes) -> JsonDict | None:
    """Decode an error body, keeping it only if it is a JSON object."""
    try:
        body = orjson.loads(content)
    except orjson.JSONDecodeError:
        return None
    return body if isinstance(body, dict) else None

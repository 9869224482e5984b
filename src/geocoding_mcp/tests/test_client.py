"""Tests for the upstream client: wire encoding and HTTP outcomes."""

from __future__ import annotations

import httpx
import pytest

from geocoding_mcp.geocoding import (
    GEOCODE_URL,
    ForwardRequest,
    UpstreamError,
    build_request,
    encode_params,
)


def test_encode_params() -> None:
    encoded = encode_params({
        "address": "Main St",
        "components": {"country": "US", "locality": "Paris"},
        "bounds": {"northeast": {"lat": 40.8, "lng": -73.9}, "southwest": {"lat": 40.7, "lng": -74.0}},
        "result_type": ["street_address", "route"],
        "location_type": ["ROOFTOP"],
    })

    assert encoded == {
        "address": "Main St",
        "components": "country:US|locality:Paris",
        "bounds": "40.7,-74.0|40.8,-73.9",
        "result_type": "street_address|route",
        "location_type": "ROOFTOP",
    }


@pytest.mark.asyncio
async def test_geocode_sends_encoded_query(client, upstream, settings) -> None:
    request = build_request(ForwardRequest(address="Paris", components={"country": "FR"}), settings)

    body = await client.execute(request)

    assert body["status"] == "OK"
    sent = upstream.requests[-1]
    assert sent.method == "GET"
    assert str(sent.url).startswith(GEOCODE_URL)
    assert upstream.last_params == {"address": "Paris", "key": "test_api_key", "language": "en", "components": "country:FR"}


@pytest.mark.asyncio
async def test_reverse_geocode_hits_same_endpoint(client, upstream) -> None:
    await client.reverse_geocode({"latlng": "40.714224,-73.961452", "key": "k"}, timeout_ms=1000)

    assert str(upstream.requests[-1].url).startswith(GEOCODE_URL)
    assert upstream.last_params["latlng"] == "40.714224,-73.961452"


@pytest.mark.asyncio
async def test_error_status_carries_payload(client, upstream) -> None:
    upstream.status_code = 403
    upstream.body = {"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid.", "results": []}

    with pytest.raises(UpstreamError) as exc_info:
        await client.geocode({"address": "Paris"}, timeout_ms=5000)

    assert str(exc_info.value) == "Request failed with status code 403"
    assert exc_info.value.status_code == 403
    assert exc_info.value.payload == upstream.body


@pytest.mark.asyncio
async def test_error_status_without_json_body(client, upstream) -> None:
    upstream.status_code = 502
    upstream.content = b"<html>Bad Gateway</html>"

    with pytest.raises(UpstreamError) as exc_info:
        await client.geocode({"address": "Paris"}, timeout_ms=5000)

    assert exc_info.value.payload is None


@pytest.mark.asyncio
async def test_invalid_json_on_success(client, upstream) -> None:
    upstream.content = b"not json"

    with pytest.raises(UpstreamError, match="Invalid JSON"):
        await client.geocode({"address": "Paris"}, timeout_ms=5000)


@pytest.mark.asyncio
async def test_non_object_body(client, upstream) -> None:
    upstream.body = ["OK"]

    with pytest.raises(UpstreamError, match="expected a JSON object"):
        await client.geocode({"address": "Paris"}, timeout_ms=5000)


@pytest.mark.asyncio
async def test_transport_errors_propagate(client, upstream) -> None:
    upstream.exc = httpx.ConnectError("connection refused")

    with pytest.raises(httpx.ConnectError):
        await client.geocode({"address": "Paris"}, timeout_ms=5000)


@pytest.mark.asyncio
async def test_aclose_resets_client(client) -> None:
    await client.geocode({"address": "Paris"}, timeout_ms=5000)
    await client.aclose()
    await client.aclose()

    assert (await client.geocode({"address": "Paris"}, timeout_ms=5000))["status"] == "OK"

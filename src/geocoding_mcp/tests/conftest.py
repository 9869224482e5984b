"""Shared fixtures: isolated settings and a programmable fake of the geocoding endpoint."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import parse_qsl, urlsplit

import httpx
import orjson
import pytest

from geocoding_mcp.foundation.config import GeocodingSettings, load_settings
from geocoding_mcp.geocoding import GeocodingClient, GeocodingService
from geocoding_mcp.runtime.observability import configure_logging

TEST_API_KEY = "test_api_key"

_ENV_VARS = (
    "GOOGLE_MAPS_API_KEY", "TIMEOUT", "RATE_LIMIT", "DEFAULT_LANGUAGE", "DEFAULT_REGION",
    "LOG_LEVEL", "LOG_FORMAT",
)
_PROXY_VARS = ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy")

OK_BODY: dict[str, Any] = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA",
            "geometry": {
                "location": {"lat": 37.4224764, "lng": -122.0842499},
                "location_type": "ROOFTOP",
            },
            "place_id": "ChIJ2eUgeAK6j4ARbn5u_wAGqWA",
            "types": ["street_address"],
            "plus_code": {"global_code": "849VCWC8+R9"},
        }
    ],
}


def make_settings(**overrides: object) -> GeocodingSettings:
    """Settings from explicit values only: no .env file."""
    return load_settings(**{"GOOGLE_MAPS_API_KEY": TEST_API_KEY, "_env_file": None, **overrides})


class FakeUpstream:
    """Records requests and answers with a canned status/body, or raises."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = OK_BODY
        self.content: bytes | None = None
        self.exc: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def quiet_logs() -> None:
    configure_logging(format="none")


@pytest.fixture
def settings_factory() -> Callable[..., GeocodingSettings]:
    return make_settings


@pytest.fixture
def settings() -> GeocodingSettings:
    return make_settings()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(upstream: FakeUpstream) -> GeocodingClient:
    return GeocodingClient(transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def service(settings: GeocodingSettings, client: GeocodingClient) -> GeocodingService:
    return GeocodingService(settings, client)


class LocalGeocoder:
    """A real HTTP endpoint on 127.0.0.1 answering every GET with `body`.

    Keeps connections alive so pooled connections are reused between calls.
    """

    def __init__(self) -> None:
        self.body: dict[str, Any] = OK_BODY
        self.queries: list[dict[str, str]] = []
        self.server = ThreadingHTTPServer(("127.0.0.1", 0), self._handler())
        host, port = self.server.server_address[:2]
        self.url = f"http://{host}:{port}/maps/api/geocode/json"

    def _handler(self) -> type[BaseHTTPRequestHandler]:
        geocoder = self

        class Handler(BaseHTTPRequestHandler):
            protocol_version = "HTTP/1.1"

            def do_GET(self) -> None:  # noqa: N802
                geocoder.queries.append(dict(parse_qsl(urlsplit(self.path).query)))
                payload = orjson.dumps(geocoder.body)
                self.send_response(200)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(payload)))
                self.end_headers()
                self.wfile.write(payload)

            def log_message(self, format: str, *args: object) -> None:  # noqa: A002
                pass

        return Handler


@pytest.fixture
def local_geocoder(monkeypatch: pytest.MonkeyPatch) -> Iterator[LocalGeocoder]:
    for name in _PROXY_VARS:
        monkeypatch.delenv(name, raising=False)
    geocoder = LocalGeocoder()
    thread = threading.Thread(target=geocoder.server.serve_forever, daemon=True)
    thread.start()
    yield geocoder
    geocoder.server.shutdown()
    geocoder.server.server_close()

"""Geocoding service: validate -> build -> call -> normalize.

The service never raises for a geocoding outcome. Validation failures,
upstream errors and transport faults all come back as a GeocodeResponse.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from geocoding_mcp.runtime.observability import get_logger

from .builder import build_request
from .client import GeocodingClient, UpstreamError
from .response import GeocodeResponse
from .validation import validate

if TYPE_CHECKING:
    from geocoding_mcp.foundation.config import GeocodingSettings

    from .requests import ForwardRequest, PlaceRequest, ReverseRequest


class GeocodingService:
    """Runs one geocoding request end to end.

    Holds the read-only settings and the shared upstream client. Safe to share
    between concurrent tool calls.
    """

    def __init__(self, settings: GeocodingSettings, client: GeocodingClient | None = None) -> None:
        self.settings = settings
        self.client = client or GeocodingClient()
        self._log = get_logger("geocoding")

    async def geocode(self, request: ForwardRequest | ReverseRequest | PlaceRequest) -> GeocodeResponse:
        log = self._log.bind(mode=request.mode)
        log.debug("geocode request")

        checked = validate(request)
        if checked.is_err():
            failure = checked.unwrap_err()
            log.info("validation failed", reason=failure.reason.value, field=failure.field)
            return GeocodeResponse.from_validation_failure(failure).with_metadata(request.mode)

        upstream = build_request(checked.unwrap(), self.settings)
        params = upstream.masked_params()
        log.debug("upstream call", operation=upstream.operation.value, params=params)

        try:
            response = GeocodeResponse.from_upstream(await self.client.execute(upstream))
        except UpstreamError as e:
            log.warning("upstream error", status_code=e.status_code, error=str(e))
            response = (
                GeocodeResponse.from_error_payload(e.payload, e)
                if e.payload is not None
                else GeocodeResponse.from_exception(e)
            )
        except Exception as e:
            log.warning("upstream unreachable", error=str(e) or type(e).__name__, error_type=type(e).__name__)
            response = GeocodeResponse.from_exception(e)

        return response.with_metadata(request.mode, params)

    async def aclose(self) -> None:
        await self.client.aclose()

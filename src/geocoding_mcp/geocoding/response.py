"""Normalized geocoding response and the normalizer that produces it.

Every outcome (upstream success, structured upstream error, bare exception,
validation failure) becomes one GeocodeResponse. `results` is always present
and empty on error; absent optional fields are omitted from the JSON.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from geocoding_mcp.foundation.errors import JsonDict

if TYPE_CHECKING:
    from .requests import GeocodeMode
    from .validation import ValidationFailure


class UpstreamStatus(StrEnum):
    """Status values reported by the geocoding endpoint."""

    OK = "OK"
    ZERO_RESULTS = "ZERO_RESULTS"
    OVER_DAILY_LIMIT = "OVER_DAILY_LIMIT"
    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"
    REQUEST_DENIED = "REQUEST_DENIED"
    INVALID_REQUEST = "INVALID_REQUEST"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ResponseMetadata(BaseModel):
    """Request context attached by the service."""

    mode: str
    request_params: JsonDict = Field(default_factory=dict)
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())


# ─────────────────────────────────────────────────────────────────────────────
# Response
# ─────────────────────────────────────────────────────────────────────────────


class GeocodeResponse(BaseModel):
    """The single output shape of every geocoding tool.

    `status` is kept as the upstream string so unrecognized values pass
    through; `results` records are preserved verbatim.
    """

    status: str
    results: list[JsonDict] = Field(default_factory=list)
    error_message: str | None = None
    metadata: ResponseMetadata | None = None

    def with_metadata(self, mode: GeocodeMode, request_params: JsonDict | None = None) -> GeocodeResponse:
        return self.model_copy(update={"metadata": ResponseMetadata(mode=mode, request_params=request_params or {})})

    def to_json(self) -> str:
        """Pretty-printed JSON (2-space indent), None fields omitted."""
        return self.model_dump_json(indent=2, exclude_none=True)

    # ─── Normalizer ──────────────────────────────────────────────────

    @classmethod
    def from_upstream(cls, body: JsonDict) -> GeocodeResponse:
        """Successful upstream call: status, results and error_message verbatim."""
        return cls(
            status=str(body.get("status", UpstreamStatus.UNKNOWN_ERROR)),
            results=_results(body.get("results")),
            error_message=body.get("error_message"),
        )

    @classmethod
    def from_error_payload(cls, payload: JsonDict, exc: Exception) -> GeocodeResponse:
        """Upstream raised but answered with a structured error body.

        Status and message come from the body; results are always empty.
        """
        return cls(
            status=str(payload.get("status") or UpstreamStatus.UNKNOWN_ERROR),
            results=[],
            error_message=payload.get("error_message") or _message(exc),
        )

    @classmethod
    def from_exception(cls, exc: Exception) -> GeocodeResponse:
        """Failure with no structured payload (network, timeout, bad body)."""
        return cls(status=UpstreamStatus.INVALID_REQUEST.value, results=[], error_message=_message(exc))

    @classmethod
    def from_validation_failure(cls, failure: ValidationFailure) -> GeocodeResponse:
        return cls(status=UpstreamStatus.INVALID_REQUEST.value, results=[], error_message=failure.message)


def _results(value: Any) -> list[JsonDict]:
    return [r for r in value if isinstance(r, dict)] if isinstance(value, list) else []


def _message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__

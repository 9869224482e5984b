"""Structured logging with bound context.

Loggers carry a context dict (logger name, tool, mode) that is merged into
every event. Output goes to stderr only: stdout carries the MCP stdio stream.

Quick Start:
    >>> from geocoding_mcp.runtime.observability import configure_logging, get_logger
    >>>
    >>> configure_logging(format="json", level="DEBUG")
    >>> log = get_logger("geocoding").bind(mode="forward")
    >>> log.debug("upstream call", operation="geocode")
"""

from __future__ import annotations

import logging
import sys
import time
import traceback
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, TextIO, runtime_checkable

import orjson

from geocoding_mcp.foundation.errors import JsonDict, JsonValue


@dataclass(slots=True)
class LogEntry:
    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def moment(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=UTC)


@runtime_checkable
class LogRenderer(Protocol):
    """Writes one log entry somewhere."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class BoundLogger:
    """Logger with immutable bound context; `bind` returns a new logger.

    Example:
        >>> log = get_logger("mcp").bind_tool("geocode_forward", "geocoding")
        >>> log.info("tool call")
        # => 10:30:45.123 [info] tool call category="geocoding" logger="mcp" tool="geocode_forward"
    """

    context: JsonDict = field(default_factory=dict)

    def bind(self, **kw: JsonValue) -> BoundLogger:
        return BoundLogger({**self.context, **kw})

    def bind_tool(self, name: str, category: str) -> BoundLogger:
        """Context for one tool invocation."""
        return self.bind(tool=name, category=category)

    def _emit(self, level: int, event: str, fields: JsonDict) -> None:
        if level < _threshold.get():
            return
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event, {**self.context, **fields})
        _current_renderer().render(entry)

    def debug(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.DEBUG, event, kw)

    def info(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.INFO, event, kw)

    def warning(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.WARNING, event, kw)

    def error(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.ERROR, event, kw)

    def exception(self, event: str, **kw: JsonValue) -> None:
        """Error event with the active traceback under `exc_info`."""
        self._emit(logging.ERROR, event, {**kw, "exc_info": traceback.format_exc()})


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────

_ANSI = {"reset": "\033[0m", "dim": "\033[2m", "bold": "\033[1m", "key": "\033[36m", "str": "\033[33m",
         "num": "\033[34m", "debug": "\033[2m", "info": "\033[32m", "warning": "\033[33m", "error": "\033[31m"}
_PLAIN = dict.fromkeys(_ANSI, "")


@dataclass(slots=True)
class ConsoleRenderer:
    """`HH:MM:SS.mmm [level] event key=value ...`, colored when writing to a terminal."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = bool(getattr(self.output, "isatty", lambda: False)())

    def render(self, entry: LogEntry) -> None:
        s = _ANSI if self.colors else _PLAIN
        stamp = entry.moment.strftime("%H:%M:%S.%f")[:-3]
        words = [
            f"{s['dim']}{stamp}{s['reset']}",
            f"{s.get(entry.level, '')}[{entry.level}]{s['reset']}",
            f"{s['bold']}{entry.event}{s['reset']}",
        ]
        trace = entry.context.get("exc_info")
        words.extend(
            f"{s['key']}{key}{s['reset']}={_show(value, s)}"
            for key, value in sorted(entry.context.items())
            if key != "exc_info"
        )
        print(" ".join(words), file=self.output)
        if trace:
            print(f"{s['error']}{trace}{s['reset']}", file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """One JSON object per line."""

    output: TextIO = field(default_factory=lambda: sys.stderr)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.moment.isoformat(), "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(record, option=orjson.OPT_NON_STR_KEYS, default=str).decode(), file=self.output)


class NoOpRenderer:
    def render(self, entry: LogEntry) -> None:
        pass


def _show(value: object, s: dict[str, str]) -> str:
    match value:
        case str():
            return f'{s["str"]}"{value}"{s["reset"]}'
        case bool():
            return f'{s["num"]}{"true" if value else "false"}{s["reset"]}'
        case int() | float():
            return f'{s["num"]}{value}{s["reset"]}'
        case dict() | list() | tuple():
            return f'{s["dim"]}{orjson.dumps(value, default=str).decode()}{s["reset"]}'
        case _:
            return repr(value)


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────

_renderer: ContextVar[LogRenderer | None] = ContextVar("geocoding_log_renderer", default=None)
_threshold: ContextVar[int] = ContextVar("geocoding_log_level", default=logging.INFO)

_FORMATS = ("console", "json", "none")


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Install the process renderer and level threshold.

    Raises:
        ValueError: format is not one of "console", "json", "none"
    """
    if format not in _FORMATS:
        raise ValueError(f"Unknown format: {format}. Use one of {', '.join(_FORMATS)}")
    stream = output or sys.stderr
    renderer: LogRenderer
    if format == "console":
        renderer = ConsoleRenderer(stream, colors)
    elif format == "json":
        renderer = JsonRenderer(stream)
    else:
        renderer = NoOpRenderer()
    _threshold.set(getattr(logging, level.upper(), logging.INFO))
    _renderer.set(renderer)
    return renderer


def get_logger(name: str | None = None, **context: JsonValue) -> BoundLogger:
    """Logger whose context starts with `logger=<name>` plus any extra fields."""
    return BoundLogger({**context, "logger": name} if name else dict(context))


def _current_renderer() -> LogRenderer:
    renderer = _renderer.get()
    if renderer is None:
        renderer = ConsoleRenderer()
        _renderer.set(renderer)
    return renderer

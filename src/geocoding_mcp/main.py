"""Process entry point: load settings, configure logging, serve MCP over stdio.

Exit codes: 0 on clean shutdown or interrupt, 1 on configuration errors and
unhandled faults.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from geocoding_mcp import __version__
from geocoding_mcp.ext.mcp import DEFAULT_SERVER_NAME, create_mcp_server
from geocoding_mcp.foundation.config import ConfigError, GeocodingSettings, load_settings
from geocoding_mcp.geocoding import GeocodingService
from geocoding_mcp.runtime.observability import configure_logging, get_logger
from geocoding_mcp.tools import build_registry

log = get_logger("main")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geocoding-mcp",
        description="Google Maps geocoding tools for MCP clients (stdio transport).",
    )
    parser.add_argument("--name", default=DEFAULT_SERVER_NAME, help=f"Server name (default: {DEFAULT_SERVER_NAME})")
    parser.add_argument("--list-tools", action="store_true", help="Print the available tools and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def run_server(settings: GeocodingSettings, name: str = DEFAULT_SERVER_NAME) -> None:
    """Serve until stdin closes, then release the shared HTTP client."""
    service = GeocodingService(settings)
    server = create_mcp_server(build_registry(service), name)
    try:
        await server.serve()
    finally:
        await service.aclose()


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as e:
        print("Configuration error:", file=sys.stderr)
        for message in e.messages:
            print(f"  - {message}", file=sys.stderr)
        return 1

    configure_logging(format=settings.logging.format, level=settings.logging.level)

    if args.list_tools:
        print(build_registry(GeocodingService(settings)).describe())
        return 0

    try:
        asyncio.run(run_server(settings, args.name))
    except KeyboardInterrupt:
        log.info("server stopped", reason="interrupt")
        return 0
    except Exception as e:
        log.exception("server failed", error=str(e) or type(e).__name__)
        return 1
    log.info("server stopped", reason="stdin closed")
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()

"""Allow `python -m geocoding_mcp`."""

from geocoding_mcp.main import cli

cli()

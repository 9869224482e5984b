"""Protocol adapters for the geocoding tools."""

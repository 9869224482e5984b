"""Runtime concerns shared by tools and the server: observability."""

"""Infrastructure layer: persistence, HTTP API, auth and outbound services."""

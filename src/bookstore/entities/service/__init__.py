"""Service entities: the records exposed through the HTTP API."""

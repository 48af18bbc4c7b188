"""API helpers: orjson-backed JSON responses."""

"""Product Catalog API.

A single-resource REST service exposing a volatile, in-memory product catalog
with filtering, search, pagination and statistics.

Layers:
- **api**: FastAPI application, routes, auth gate, middleware and error handlers
- **core**: configuration, logging, request context and the error taxonomy
- **domain**: the product entity, query value objects and payload validation
- **infrastructure**: the in-memory catalog store
"""

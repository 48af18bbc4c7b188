"""HTTP API layer built on FastAPI.

- **main**: application factory wiring middleware, handlers and routers
- **auth**: shared-secret admission check for the catalog routes
- **routes**: public endpoints and the ``/api/products`` router
- **middleware**: request context, request logging and exception handlers
- **schemas**: the error response body
- **utils**: orjson-backed JSON responses
"""

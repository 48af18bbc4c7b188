"""Starlette middleware and exception handlers wrapped around every request.

- **RequestContextMiddleware**: correlation and request IDs
- **RequestLoggingMiddleware**: request start/completion logging with timing
- **error_handler**: exception handlers turning failures into error bodies

Order, outermost first: request context, request logging, routing (with the
auth dependency on catalog routes), then the exception handlers around the
route handler.
"""

"""Request context middleware for correlation and request IDs.

The correlation ID is taken from the incoming ``X-Correlation-ID`` header when
a caller supplies one (so a chain of services shares it) and generated
otherwise. Each request also gets its own request ID. Both are stored in
contextvars, bound to every log line emitted while the request is served,
and echoed back in the response headers.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from product_catalog.api.constants import CORRELATION_ID_HEADER, REQUEST_ID_HEADER
from product_catalog.core.context import (
    RequestContext,
    generate_correlation_id,
    generate_request_id,
)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to manage request context and correlation IDs."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = (
            request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        )
        request_id = generate_request_id()

        RequestContext.set_correlation_id(correlation_id)
        RequestContext.set_request_id(request_id)

        try:
            with logger.contextualize(
                correlation_id=correlation_id, request_id=request_id
            ):
                response = await call_next(request)
        finally:
            RequestContext.clear()

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

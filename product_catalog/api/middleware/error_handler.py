"""Global exception handlers for the FastAPI application.

These handlers are the single place where failures become HTTP responses.
Route handlers, the auth dependency, validation and the store only raise;
here every exception is logged through the diagnostic log (with sensitive
values redacted) and then rendered as an ``ErrorResponse``. Internal details
such as stack traces are never sent to the client.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from product_catalog.api.schemas.errors import ErrorResponse
from product_catalog.api.utils.responses import ORJSONResponse
from product_catalog.core.context import RequestContext
from product_catalog.core.error_context import sanitize_error_context
from product_catalog.core.exceptions import CatalogError, ErrorCode

GENERIC_ERROR_MESSAGE = "Internal Server Error"

# Starlette raises these when no route matches the method and path
_UNMATCHED_ROUTE_STATUSES = {
    status.HTTP_404_NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED,
}

_STATUS_TO_ERROR_CODE = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.VALIDATION_ERROR,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorCode.FORBIDDEN,
}


def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: list[dict[str, object]] | None = None,
) -> ORJSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    return ORJSONResponse(status_code=status_code, content=body.to_content())


def _request_context(request: Request) -> dict[str, object]:
    return {
        "request_method": request.method,
        "request_path": request.url.path,
        "correlation_id": RequestContext.get_correlation_id(),
        "request_id": RequestContext.get_request_id(),
    }


async def catalog_error_handler(request: Request, exc: Exception) -> Response:
    """Handle CatalogError exceptions.

    Args:
        request: The request that caused the exception
        exc: The CatalogError raised while serving it

    Returns:
        Response: Error body with the status code carried by the exception

    Raises:
        TypeError: If exc is not a CatalogError instance
    """
    if not isinstance(exc, CatalogError):
        raise TypeError(f"Expected CatalogError, got {type(exc).__name__}")

    error_context = sanitize_error_context(
        exc,
        {**_request_context(request), "error_code": exc.error_code},
    )
    log = logger.warning if exc.is_expected else logger.error
    log(
        "Handling {exception_type}: {message}",
        exception_type=type(exc).__name__,
        message=exc.message,
        status_code=exc.status_code,
        **error_context,
    )

    return _error_response(exc.status_code, exc.error_code, exc.message, exc.details)


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle bodies FastAPI itself could not decode or bind.

    These are reported exactly like a rejected product payload: 400 with one
    ``details`` entry per offending field.

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    details: list[dict[str, object]] = []
    for error in exc.errors():
        # ("body", "price") -> "price"; a JSON offset or bare ("body",) -> "body"
        loc = error.get("loc", ())
        if len(loc) > 1 and isinstance(loc[1], str):
            field = ".".join(str(part) for part in loc[1:])
        else:
            field = "body"
        details.append({"field": field, "message": error.get("msg", "Invalid value")})

    logger.warning(
        "Request validation failed",
        status_code=status.HTTP_400_BAD_REQUEST,
        validation_errors=details,
        **_request_context(request),
    )

    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.VALIDATION_ERROR.value,
        "Validation failed",
        details,
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException, notably unmatched routes.

    An unknown path, or a known path with an unsupported method, gets the
    generic ``NotFound`` body.

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    logger.warning(
        "HTTP exception",
        status_code=exc.status_code,
        detail=exc.detail,
        **_request_context(request),
    )

    if exc.status_code in _UNMATCHED_ROUTE_STATUSES:
        return _error_response(
            status.HTTP_404_NOT_FOUND,
            ErrorCode.ROUTE_NOT_FOUND.value,
            f"Route {request.url.path} not found",
        )

    error_code = _STATUS_TO_ERROR_CODE.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    return _error_response(exc.status_code, error_code.value, str(exc.detail))


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle every exception no other handler claimed.

    The full exception, traceback included, goes to the log; the client only
    sees a generic message. The exception's own ``status_code`` attribute is
    honoured when it holds an HTTP error status, otherwise 500 is used.
    """
    error_context = sanitize_error_context(exc, _request_context(request))
    logger.opt(exception=exc).error(
        "Unhandled exception: {exception_type}",
        exception_type=type(exc).__name__,
        **error_context,
    )

    status_code = getattr(exc, "status_code", None)
    if not isinstance(status_code, int) or not 400 <= status_code <= 599:  # noqa: PLR2004
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return _error_response(
        status_code, ErrorCode.INTERNAL_ERROR.value, GENERIC_ERROR_MESSAGE
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers registered")

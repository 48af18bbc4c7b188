"""Request-scoped identifiers shared across async boundaries."""

import uuid
from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestContext:
    """Holds the identifiers of the request currently being served.

    Backed by contextvars, so each request task sees its own values.
    """

    @staticmethod
    def set_correlation_id(correlation_id: str) -> None:
        _correlation_id_var.set(correlation_id)

    @staticmethod
    def get_correlation_id() -> str | None:
        return _correlation_id_var.get()

    @staticmethod
    def set_request_id(request_id: str) -> None:
        _request_id_var.set(request_id)

    @staticmethod
    def get_request_id() -> str | None:
        return _request_id_var.get()

    @staticmethod
    def clear() -> None:
        """Reset both identifiers at the end of a request."""
        _correlation_id_var.set(None)
        _request_id_var.set(None)


def generate_correlation_id() -> str:
    """Generate a correlation ID that may span several services.

    Returns:
        str: A string representation of a UUID4.
    """
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """Generate an ID unique to a single request.

    Returns:
        str: A prefixed UUID4 string in format 'req-<uuid4>'.
    """
    return f"req-{uuid.uuid4()}"

"""Structured exception hierarchy for consistent error handling.

Every failure the catalog can signal is a subclass of ``CatalogError``. Each
carries:

- **error_code**: the machine-readable kind sent to clients as ``error``
- **status_code**: the HTTP status the API layer responds with
- **severity**: drives the log level used by the error handlers
- **details**: structured, client-visible information (validation failures)
- **context**: diagnostic data that is logged but never sent to clients

Handlers raise these exceptions instead of building error responses inline;
the exception handlers registered in ``product_catalog.api.middleware`` are
the single place where they become HTTP responses.
"""

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Error kinds exposed to API clients in the ``error`` field."""

    INTERNAL_ERROR = "InternalServerError"
    """An unexpected internal error occurred in the system."""

    VALIDATION_ERROR = "ValidationError"
    """Input validation failed due to invalid or malformed data."""

    NOT_FOUND = "NotFoundError"
    """The addressed catalog entity does not exist."""

    ROUTE_NOT_FOUND = "NotFound"
    """No route matches the requested method and path."""

    UNAUTHORIZED = "Unauthorized"
    """No credential was presented."""

    FORBIDDEN = "Forbidden"
    """A credential was presented but it is not valid."""


class Severity(Enum):
    """Severity levels used to pick how loudly an error is logged."""

    LOW = "LOW"
    """Expected errors caused by client input."""

    MEDIUM = "MEDIUM"
    """Errors that may affect some features but not critical ops."""

    HIGH = "HIGH"
    """Errors worth attention, such as rejected credentials."""


class CatalogError(Exception):
    """Base exception class for all catalog application exceptions.

    Args:
        error_code: Kind of the error (string or ErrorCode enum)
        message: Human-readable error message
        status_code: HTTP status code for the error response
        severity: Severity level of the error (defaults to MEDIUM)
        details: Structured details safe to return to the client
        context: Additional diagnostic information, logged only
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        status_code: int = 500,
        severity: Severity = Severity.MEDIUM,
        details: list[dict[str, Any]] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.status_code = status_code
        self.severity = severity
        self.details = details
        self.context = context or {}
        super().__init__(message)

    @property
    def is_expected(self) -> bool:
        """Whether the error arises from normal operation (bad input, missing ids).

        Returns:
            bool: True if the error is expected (LOW or MEDIUM severity)
        """
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        details_str = f", details={self.details}" if self.details else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', status_code={self.status_code}"
            f"{details_str})"
        )


class ValidationError(CatalogError):
    """Exception raised when input validation fails.

    Args:
        message: Description of the validation failure
        details: One entry per violated field, e.g.
            ``{"field": "price", "message": "must be >= 0"}``
        context: Additional diagnostic information about the error
    """

    def __init__(
        self,
        message: str,
        details: list[dict[str, Any]] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.VALIDATION_ERROR,
            message,
            status_code=400,
            severity=Severity.LOW,
            details=details,
            context=context,
        )


class NotFoundError(CatalogError):
    """Exception raised when a requested product does not exist.

    Args:
        message: Description of what was not found
        context: Additional diagnostic information about the error
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            ErrorCode.NOT_FOUND,
            message,
            status_code=404,
            severity=Severity.LOW,
            context=context,
        )


class UnauthorizedError(CatalogError):
    """Exception raised when a request carries no credential.

    Args:
        message: Description of the authentication failure
        context: Additional diagnostic information about the error
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            ErrorCode.UNAUTHORIZED,
            message,
            status_code=401,
            severity=Severity.MEDIUM,
            context=context,
        )


class ForbiddenError(CatalogError):
    """Exception raised when a request carries a credential that is rejected.

    Args:
        message: Description of the authorization failure
        context: Additional diagnostic information about the error
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            ErrorCode.FORBIDDEN,
            message,
            status_code=403,
            severity=Severity.HIGH,
            context=context,
        )

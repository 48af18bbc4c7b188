"""Redaction of sensitive values before they reach the logs.

Error handlers and the request logger pass their structured context through
these helpers so that credentials (the ``x-api-key`` header in particular)
never end up in log output. Only the logged copies are sanitized; the data
itself is left untouched.
"""

from __future__ import annotations

import re
from functools import lru_cache
from re import Pattern
from typing import Any, Final

from product_catalog.core.config import get_settings
from product_catalog.core.constants import MAX_SANITIZE_DEPTH, REDACTED

SENSITIVE_HEADERS = {
    "authorization",
    "cookie",
    "x-api-key",
    "x-auth-token",
    "set-cookie",
    "proxy-authorization",
}

DEFAULT_SENSITIVE_PATTERN: Final[Pattern[str]] = re.compile(
    r"(password|passwd|secret|token|api[_-]?key|apikey|authorization|"
    r"credential|private[_-]?key|session)",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def _get_sensitive_fields() -> tuple[str, ...]:
    """Get the configured sensitive fields from settings."""
    return tuple(field.lower() for field in get_settings().log_config.sensitive_fields)


def is_sensitive_field(field_name: str) -> bool:
    """Check if a field name indicates sensitive data.

    Args:
        field_name: The field name to check.

    Returns:
        bool: True if the field matches the default pattern or a configured field.
    """
    if DEFAULT_SENSITIVE_PATTERN.search(field_name):
        return True

    field_lower = field_name.lower()
    return any(field in field_lower for field in _get_sensitive_fields())


def sanitize_value(value: Any, field_name: str = "", depth: int = 0) -> Any:  # noqa: ANN401
    """Sanitize a value, recursing into dicts, lists and tuples.

    Args:
        value: The value to potentially sanitize.
        field_name: The key the value was stored under, if any.
        depth: Current recursion depth.

    Returns:
        Any: The value with sensitive entries replaced by ``[REDACTED]``.
    """
    if depth > MAX_SANITIZE_DEPTH:
        return REDACTED

    if field_name and is_sensitive_field(field_name):
        return REDACTED

    if isinstance(value, dict):
        return {k: sanitize_value(v, str(k), depth + 1) for k, v in value.items()}
    if isinstance(value, list):
        return [sanitize_value(item, "", depth + 1) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize_value(item, "", depth + 1) for item in value)

    return value


def sanitize_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with sensitive values redacted."""
    return {key: sanitize_value(value, key) for key, value in data.items()}


def sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive HTTP headers (matched case-insensitively)."""
    return {
        k: REDACTED if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()
    }


def sanitize_error_context(
    error: Exception, context: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Create sanitized error context for logging.

    Args:
        error: The exception to describe.
        context: Additional context to include (will be sanitized).

    Returns:
        dict[str, Any]: Error type, message and context, safe for logging.
    """
    error_context: dict[str, Any] = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        error_context.update(sanitize_dict(context))

    extra_context = getattr(error, "context", None)
    if isinstance(extra_context, dict) and extra_context:
        error_context["error_context"] = sanitize_dict(extra_context)

    return error_context

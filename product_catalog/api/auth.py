"""Shared-secret admission check for the catalog routes.

The check itself, ``check_api_key``, is a pure function of the presented
credential and the configured secret. ``require_api_key`` adapts it into a
FastAPI dependency that is attached to the catalog router, so it runs before
any catalog handler and never for the public routes.
"""

import secrets
from typing import Annotated

from fastapi import Header, Request

from product_catalog.api.constants import API_KEY_HEADER
from product_catalog.core.config import Settings
from product_catalog.core.exceptions import ForbiddenError, UnauthorizedError


def check_api_key(presented: str | None, expected: str) -> None:
    """Admit or reject a request based on its API key.

    Args:
        presented: Value of the ``x-api-key`` header, if any.
        expected: The configured shared secret.

    Raises:
        UnauthorizedError: If no key was presented.
        ForbiddenError: If the key does not match the secret.
    """
    if not presented:
        raise UnauthorizedError(f"API key is required in {API_KEY_HEADER} header")

    if not secrets.compare_digest(presented.encode(), expected.encode()):
        raise ForbiddenError("Invalid API key")


async def require_api_key(
    request: Request,
    x_api_key: Annotated[str | None, Header(alias=API_KEY_HEADER)] = None,
) -> None:
    """FastAPI dependency enforcing ``check_api_key`` with the app's settings."""
    settings: Settings = request.app.state.settings
    check_api_key(x_api_key, settings.api_key)

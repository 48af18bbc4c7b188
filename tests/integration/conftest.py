"""Shared fixtures for integration tests.

Every test gets its own application built by ``create_app``, and therefore
its own freshly seeded catalog, so tests never observe each other's writes.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from product_catalog.api.main import create_app
from product_catalog.core.config import Settings

BASE_URL = "http://test"


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Create an application with the test API key and the sample catalog."""
    return create_app(test_settings)


@pytest.fixture
async def client(
    app: FastAPI, test_settings: Settings
) -> AsyncGenerator[AsyncClient]:
    """Client that sends the correct API key with every request."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=BASE_URL,
        headers={"x-api-key": test_settings.api_key},
    ) as async_client:
        yield async_client


@pytest.fixture
async def anonymous_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client that sends no API key."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url=BASE_URL
    ) as async_client:
        yield async_client

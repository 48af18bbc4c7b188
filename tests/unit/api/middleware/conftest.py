"""Fixtures for API middleware tests."""

from typing import cast

import pytest
from fastapi import Request
from pytest_mock import MockerFixture, MockType
from starlette.datastructures import URL
from starlette.responses import Response


@pytest.fixture
def mock_request(mocker: MockerFixture) -> MockType:
    """Create mock FastAPI Request with standard HTTP attributes.

    Returns:
        MockType: Mock request for GET /api/products.
    """
    request = mocker.Mock(spec=Request)
    request.method = "GET"
    request.url = mocker.Mock(spec=URL)
    request.url.path = "/api/products"
    request.headers = {"user-agent": "test-client/1.0"}
    request.query_params = {}
    request.client = mocker.Mock()
    request.client.host = "127.0.0.1"

    return cast("MockType", request)


@pytest.fixture
def mock_call_next(mocker: MockerFixture) -> MockType:
    """Create the next ASGI layer returning a plain 200 response."""
    return cast("MockType", mocker.AsyncMock(return_value=Response(status_code=200)))

"""Unit tests for the request context middleware."""

import uuid

import pytest
from pytest_mock import MockerFixture, MockType
from starlette.requests import Request
from starlette.responses import Response

from product_catalog.api.middleware.request_context import RequestContextMiddleware
from product_catalog.core.context import RequestContext


@pytest.fixture
def middleware(mocker: MockerFixture) -> RequestContextMiddleware:
    return RequestContextMiddleware(mocker.Mock())


@pytest.mark.unit
class TestRequestContextMiddleware:
    """Test correlation and request ID handling."""

    async def test_generates_ids(
        self,
        middleware: RequestContextMiddleware,
        mock_request: MockType,
        mock_call_next: MockType,
    ) -> None:
        response = await middleware.dispatch(mock_request, mock_call_next)

        correlation_id = response.headers["X-Correlation-ID"]
        assert str(uuid.UUID(correlation_id)) == correlation_id
        assert response.headers["X-Request-ID"].startswith("req-")

    async def test_propagates_incoming_correlation_id(
        self,
        middleware: RequestContextMiddleware,
        mock_request: MockType,
        mock_call_next: MockType,
    ) -> None:
        mock_request.headers = {"X-Correlation-ID": "upstream-42"}

        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.headers["X-Correlation-ID"] == "upstream-42"

    async def test_context_visible_downstream_and_cleared(
        self,
        middleware: RequestContextMiddleware,
        mock_request: MockType,
    ) -> None:
        seen: dict[str, str | None] = {}

        async def call_next(request: Request) -> Response:
            seen["correlation_id"] = RequestContext.get_correlation_id()
            seen["request_id"] = RequestContext.get_request_id()
            return Response()

        response = await middleware.dispatch(mock_request, call_next)

        assert seen["correlation_id"] == response.headers["X-Correlation-ID"]
        assert seen["request_id"] == response.headers["X-Request-ID"]
        assert RequestContext.get_correlation_id() is None
        assert RequestContext.get_request_id() is None

    async def test_context_cleared_on_failure(
        self,
        middleware: RequestContextMiddleware,
        mock_request: MockType,
        mock_call_next: MockType,
    ) -> None:
        mock_call_next.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await middleware.dispatch(mock_request, mock_call_next)

        assert RequestContext.get_correlation_id() is None

"""Unit tests for the Loguru configuration and formatters."""

import json
import logging
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any

import pytest
from pytest_mock import MockerFixture

from product_catalog.core.config import Settings
from product_catalog.core.logging import (
    FALLBACK_LOG_FORMAT,
    InterceptHandler,
    _state,
    format_console_with_context,
    serialize_for_json,
    setup_logging,
)


def make_record(**extra: Any) -> dict[str, Any]:
    """Build a minimal Loguru-like record."""
    return {
        "time": datetime(2024, 6, 14, 12, 0, 0, 123000, tzinfo=UTC),
        "level": SimpleNamespace(name="INFO"),
        "message": "Request completed",
        "name": "product_catalog.api",
        "function": "dispatch",
        "line": 42,
        "extra": extra,
        "exception": None,
    }


@pytest.fixture
def reset_logging_state() -> Any:
    """Let setup_logging run again, restoring the flag afterwards."""
    original = _state.configured
    _state.configured = False
    yield
    _state.configured = original


@pytest.mark.unit
class TestConsoleFormatter:
    """Test the console format builder."""

    def test_includes_priority_fields_first(self) -> None:
        record = make_record(
            correlation_id="1234567890abcdef",
            method="GET",
            path="/api/products",
            status_code=200,
            duration_ms=1.5,
            query_params={"page": "1"},
        )

        line = format_console_with_context(record)

        assert line.startswith("<green>2024-06-14 12:00:00.123</green>")
        assert "12345678" in line
        assert "1234567890abcdef" not in line
        assert line.index("GET") < line.index("/api/products")
        assert "<green>200</green>" in line
        assert "1.5ms" in line
        assert line.endswith("Request completed\n")

    def test_escapes_braces(self) -> None:
        record = make_record(query_params={"q": "{x}"})
        record["message"] = "value {not a field}"

        line = format_console_with_context(record)

        assert "{{not a field}}" in line
        assert "{{'q': '{{x}}'}}" in line

    def test_redacts_sensitive_extra_fields(self) -> None:
        line = format_console_with_context(make_record(api_key="secret-value"))

        assert "secret-value" not in line
        assert "api_key=[REDACTED]" in line

    def test_truncates_long_values(self) -> None:
        line = format_console_with_context(make_record(blob="x" * 500))

        assert "x" * 97 + "..." in line
        assert "x" * 98 not in line

    def test_adds_exception_placeholder(self) -> None:
        record = make_record()
        record["exception"] = SimpleNamespace(type=ValueError, value=ValueError("x"))

        assert format_console_with_context(record).endswith("\n{exception}\n")

    def test_falls_back_on_malformed_record(self) -> None:
        assert format_console_with_context({"extra": {}}) == FALLBACK_LOG_FORMAT


@pytest.mark.unit
class TestJsonFormatter:
    """Test the JSON line serializer."""

    def test_serializes_record_with_extra(self) -> None:
        record = make_record(correlation_id="abc", api_key="secret", _internal=1)

        entry = json.loads(serialize_for_json(record))

        assert entry["timestamp"] == "2024-06-14T12:00:00.123000+00:00"
        assert entry["level"] == "INFO"
        assert entry["message"] == "Request completed"
        assert entry["correlation_id"] == "abc"
        assert entry["api_key"] == "[REDACTED]"
        assert "_internal" not in entry
        assert "exception" not in entry

    def test_serializes_exception(self) -> None:
        record = make_record()
        record["exception"] = SimpleNamespace(
            type=RuntimeError, value=RuntimeError("boom")
        )

        entry = json.loads(serialize_for_json(record))

        assert entry["exception"] == {"type": "RuntimeError", "value": "boom"}

    def test_ends_with_newline(self) -> None:
        assert serialize_for_json(make_record()).endswith("\n")


@pytest.mark.unit
@pytest.mark.usefixtures("reset_logging_state")
class TestSetupLogging:
    """Test sink configuration."""

    def test_console_sink(self, mocker: MockerFixture) -> None:
        mock_logger = mocker.patch("product_catalog.core.logging.logger")
        mocker.patch("product_catalog.core.logging.logging.basicConfig")
        settings = Settings(log_config={"log_formatter_type": "console"})

        setup_logging(settings)

        mock_logger.remove.assert_called_once()
        kwargs = mock_logger.add.call_args.kwargs
        assert kwargs["colorize"] is True
        assert kwargs["level"] == "INFO"
        assert _state.configured is True

    def test_json_sink(self, mocker: MockerFixture) -> None:
        mock_logger = mocker.patch("product_catalog.core.logging.logger")
        mocker.patch("product_catalog.core.logging.logging.basicConfig")
        settings = Settings(log_config={"log_formatter_type": "json"})

        setup_logging(settings)

        sink = mock_logger.add.call_args.args[0]
        assert callable(sink)
        assert mock_logger.add.call_args.kwargs["diagnose"] is False

    def test_only_configures_once(self, mocker: MockerFixture) -> None:
        mock_logger = mocker.patch("product_catalog.core.logging.logger")
        mocker.patch("product_catalog.core.logging.logging.basicConfig")
        settings = Settings()

        setup_logging(settings)
        setup_logging(settings)

        assert mock_logger.remove.call_count == 1


@pytest.mark.unit
class TestInterceptHandler:
    """Test forwarding from the standard library."""

    def test_forwards_to_loguru(self, mocker: MockerFixture) -> None:
        mock_logger = mocker.patch("product_catalog.core.logging.logger")
        mock_logger.level.return_value = SimpleNamespace(name="WARNING")
        record = logging.LogRecord(
            "uvicorn.error", logging.WARNING, __file__, 1, "port %s busy", (3000,), None
        )

        InterceptHandler().emit(record)

        opt_logger = mock_logger.opt.return_value
        opt_logger.log.assert_called_once_with("WARNING", "port 3000 busy")

    def test_unknown_level_uses_number(self, mocker: MockerFixture) -> None:
        mock_logger = mocker.patch("product_catalog.core.logging.logger")
        mock_logger.level.side_effect = ValueError("unknown level")
        record = logging.LogRecord("lib", 25, __file__, 1, "custom", (), None)
        record.levelname = "NOTICE"

        InterceptHandler().emit(record)

        mock_logger.opt.return_value.log.assert_called_once_with(25, "custom")

"""Root conftest.py for the Product Catalog test suite.

This file contains project-wide fixtures and pytest configuration.
"""

import os
from collections.abc import Generator

import pytest

from product_catalog.core.config import Settings, get_settings
from product_catalog.core.context import RequestContext
from product_catalog.core.error_context import _get_sensitive_fields

TEST_API_KEY = "test-api-key"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture(autouse=True)
def clean_settings_cache() -> Generator[None]:
    """Clear cached settings before and after each test."""
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()
    yield
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove app-specific environment variables that could leak into Settings.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        pytest.MonkeyPatch: The monkeypatch instance for env manipulation.
    """
    env_prefixes = (
        "APP_",
        "API_",
        "ENVIRONMENT",
        "DEBUG",
        "SEED_CATALOG",
        "LOG_CONFIG__",
        "PORT",
    )
    for key in list(os.environ):
        if key.startswith(env_prefixes):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Ensure no correlation or request ID leaks between tests."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings with a known API key and no auto-detected surprises.

    Returns:
        Settings: Development settings using ``TEST_API_KEY``.
    """
    return Settings(
        api_key=TEST_API_KEY,
        environment="development",
        log_config={"log_formatter_type": "console", "log_level": "DEBUG"},
    )

"""Pytest configuration.

This configuration ensures:
1. Settings can be constructed without a real environment
2. Cached singletons (settings, container factories) never leak between tests
3. Custom markers are registered
"""

import os

import pytest

# Settings requires an encryption key; tests never touch real secrets.
os.environ.setdefault("ENCRYPTION_KEY", "test-encryption-key-32-bytes-ok!")
os.environ.setdefault("ENVIRONMENT", "testing")

from networth.core.config import get_settings  # noqa: E402
from networth.core.container import infrastructure as container  # noqa: E402


@pytest.fixture(autouse=True)
def clear_cached_singletons():
    """Clear lru_cache singletons before and after each test."""
    factories = (
        get_settings,
        container.get_logger,
        container.get_encryption_service,
        container.get_database,
        container.get_market_hours_service,
        container.get_call_budget,
        container.get_price_providers,
        container.get_mock_price_provider,
    )
    for factory in factories:
        factory.cache_clear()
    yield
    for factory in factories:
        factory.cache_clear()


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests against mocked HTTP or SQLite"
    )

"""Unit tests for container factories.

Verifies provider selection, mock mode wiring and singleton caching.
"""

import os
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from networth.core.container import (
    build_credential_manager,
    build_price_refresh_service,
    get_call_budget,
    get_encryption_service,
    get_logger,
    get_price_providers,
)
from networth.core.config import get_settings
from networth.infrastructure.providers import AlphaVantageClient, TwelveDataClient

KEY = "0123456789abcdef0123456789abcdef"


def configure(**env: str):
    """Patch the environment and reset cached settings."""
    patcher = patch.dict(os.environ, {"ENCRYPTION_KEY": KEY, **env}, clear=True)
    patcher.start()
    get_settings.cache_clear()
    return patcher


@pytest.fixture
def env():
    patchers = []

    def _configure(**values: str):
        patchers.append(configure(**values))

    yield _configure
    for patcher in patchers:
        patcher.stop()


@pytest.mark.unit
class TestPriceProviders:
    """get_price_providers ordering and filtering."""

    def test_both_keys_primary_first(self, env):
        env(TWELVE_DATA_API_KEY="td", ALPHA_VANTAGE_API_KEY="av")

        providers = get_price_providers()

        assert [type(p) for p in providers] == [TwelveDataClient, AlphaVantageClient]

    def test_swapped_priority(self, env):
        env(
            TWELVE_DATA_API_KEY="td",
            ALPHA_VANTAGE_API_KEY="av",
            PRIMARY_PRICE_PROVIDER="alphavantage",
            FALLBACK_PRICE_PROVIDER="twelvedata",
        )

        providers = get_price_providers()

        assert [p.name for p in providers] == ["alphavantage", "twelvedata"]

    def test_missing_key_leaves_provider_out(self, env):
        env(ALPHA_VANTAGE_API_KEY="av")

        assert [p.name for p in get_price_providers()] == ["alphavantage"]

    def test_no_keys_no_providers(self, env):
        env()

        assert get_price_providers() == ()

    def test_fallback_key_only_is_still_used(self, env):
        env(
            ALPHA_VANTAGE_API_KEY="av",
            PRIMARY_PRICE_PROVIDER="twelvedata",
            FALLBACK_PRICE_PROVIDER="alphavantage",
        )

        assert [p.name for p in get_price_providers()] == ["alphavantage"]

    def test_alpha_vantage_shares_call_budget(self, env):
        env(ALPHA_VANTAGE_API_KEY="av")

        (client,) = get_price_providers()

        assert isinstance(client, AlphaVantageClient)
        assert client._call_budget is get_call_budget()

    def test_duplicate_provider_order_fails_fast(self, env):
        env(
            ALPHA_VANTAGE_API_KEY="av",
            PRIMARY_PRICE_PROVIDER="twelvedata",
            FALLBACK_PRICE_PROVIDER="twelvedata",
        )

        with pytest.raises(ValidationError, match="must differ"):
            get_price_providers()


@pytest.mark.unit
class TestSingletons:
    """App-scoped factories return cached instances."""

    def test_call_budget_is_shared(self, env):
        env(TWELVE_DATA_DAILY_LIMIT="100")

        budget = get_call_budget()

        assert budget is get_call_budget()
        assert budget.snapshot()["twelvedata"].daily_limit == 100
        assert budget.snapshot()["alphavantage"].per_minute_limit == 5

    def test_encryption_service_from_settings(self, env):
        env()

        service = get_encryption_service()

        token = service.encrypt(b"secret").value
        assert service.decrypt(token).value == b"secret"

    def test_invalid_encryption_key_raises(self):
        with patch.dict(os.environ, {"ENCRYPTION_KEY": "short"}, clear=True):
            get_settings.cache_clear()
            with pytest.raises(RuntimeError, match="encryption service"):
                get_encryption_service()

    def test_logger_is_shared(self, env):
        env(ENVIRONMENT="testing")

        assert get_logger() is get_logger()


@pytest.mark.unit
class TestServiceBuilders:
    """Session-bound builders wire repositories and singletons."""

    def test_price_service_mock_mode_without_keys(self, env):
        env()

        service = build_price_refresh_service(MagicMock())

        assert service.provider_name == "Mock Price Provider"

    def test_price_service_live_with_key(self, env):
        env(TWELVE_DATA_API_KEY="td")

        service = build_price_refresh_service(MagicMock())

        assert service.provider_name == "Twelve Data"

    def test_credential_manager(self, env):
        env()

        manager = build_credential_manager(MagicMock())

        assert manager is not build_credential_manager(MagicMock())

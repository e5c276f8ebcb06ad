"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Settings (environment)
- Logging (console)
- Encryption (AES-256-GCM)
- Database (PostgreSQL)
- Market hours
- Provider call budgets
- Price providers (Twelve Data, Alpha Vantage, mock)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from networth.core.config import get_settings
from networth.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from networth.application.services.market_hours_service import (
        MarketHoursService,
    )
    from networth.domain.protocols.call_budget_protocol import CallBudgetProtocol
    from networth.domain.protocols.logger_protocol import LoggerProtocol
    from networth.domain.protocols.price_provider_protocol import (
        PriceProviderProtocol,
    )
    from networth.infrastructure.security.encryption_service import (
        EncryptionService,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from networth.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_encryption_service() -> "EncryptionService":
    """Get encryption service singleton (app-scoped).

    Uses settings.encryption_key (32 UTF-8 bytes) for AES-256-GCM.

    Raises:
        RuntimeError: If encryption key is invalid.

    Usage:
        encryption = get_encryption_service()
        result = encryption.encrypt(b'{"key": "..."}')
    """
    from networth.core.result import Failure, Success
    from networth.infrastructure.security.encryption_service import (
        EncryptionService,
    )

    result = EncryptionService.create(get_settings().encryption_key.encode("utf-8"))

    match result:
        case Success(value=service):
            return service
        case Failure(error=err):
            raise RuntimeError(
                f"Failed to initialize encryption service: {err.message}"
            )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Usage:
        async with get_database().get_session() as session:
            ...
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_market_hours_service() -> "MarketHoursService":
    """Get market hours singleton built from settings."""
    from networth.application.services.market_hours_service import (
        MarketHoursService,
    )

    return MarketHoursService.from_settings(get_settings())


@lru_cache()
def get_call_budget() -> "CallBudgetProtocol":
    """Get the process-wide provider call budget.

    One instance per process so every refresh shares the same counters.
    """
    from networth.domain.enums import PriceSource
    from networth.domain.value_objects.call_budget import ProviderLimits
    from networth.infrastructure.rate_limit.call_budget import ProviderCallBudget

    settings = get_settings()
    return ProviderCallBudget(
        {
            PriceSource.TWELVE_DATA.value: ProviderLimits(
                daily_limit=settings.twelve_data_daily_limit,
                per_minute_limit=settings.twelve_data_rate_limit,
            ),
            PriceSource.ALPHA_VANTAGE.value: ProviderLimits(
                daily_limit=settings.alpha_vantage_daily_limit,
                per_minute_limit=settings.alpha_vantage_rate_limit,
            ),
        },
        timezone=settings.market_timezone,
    )


@lru_cache()
def get_price_providers() -> tuple["PriceProviderProtocol", ...]:
    """Configured price providers, primary first.

    Providers without an API key are left out. An empty tuple means
    mock mode.
    """
    from networth.domain.enums import PriceSource
    from networth.infrastructure.providers import AlphaVantageClient, TwelveDataClient

    settings = get_settings()
    available: dict[str, "PriceProviderProtocol"] = {}

    if settings.twelve_data_api_key:
        available[PriceSource.TWELVE_DATA.value] = TwelveDataClient(
            api_key=settings.twelve_data_api_key,
            base_url=settings.twelve_data_base_url,
            timeout=settings.provider_timeout_seconds,
            exchange_timezone=settings.market_timezone,
            call_budget=get_call_budget(),
        )
    if settings.alpha_vantage_api_key:
        available[PriceSource.ALPHA_VANTAGE.value] = AlphaVantageClient(
            api_key=settings.alpha_vantage_api_key,
            base_url=settings.alpha_vantage_base_url,
            timeout=settings.provider_timeout_seconds,
            exchange_timezone=settings.market_timezone,
        )

    order = [settings.primary_price_provider, settings.fallback_price_provider]
    providers: list["PriceProviderProtocol"] = []
    for name in order:
        provider = available.get(name)
        if provider is not None and provider not in providers:
            providers.append(provider)
    return tuple(providers)


@lru_cache()
def get_mock_price_provider() -> "PriceProviderProtocol":
    """Deterministic provider used when no API key is configured."""
    from networth.infrastructure.providers import MockPriceProvider

    return MockPriceProvider()

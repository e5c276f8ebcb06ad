"""Service factories.

Request-scoped builders: each takes the caller's AsyncSession, wires the
repositories onto it and returns a service sharing the app-scoped
singletons (encryption, budgets, providers, logger).

Usage:
    async with get_database().get_session() as session:
        prices = build_price_refresh_service(session)
        result = await prices.refresh_symbol("AAPL")
"""

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from networth.core.config import get_settings
from networth.core.container.infrastructure import (
    get_call_budget,
    get_encryption_service,
    get_logger,
    get_market_hours_service,
    get_mock_price_provider,
    get_price_providers,
)

if TYPE_CHECKING:
    from networth.application.services.credential_manager import CredentialManager
    from networth.application.services.price_refresh_service import (
        PriceRefreshService,
    )


def build_credential_manager(session: AsyncSession) -> "CredentialManager":
    """Credential manager bound to a database session."""
    from networth.application.services.credential_manager import CredentialManager
    from networth.application.services.credential_store import CredentialStore
    from networth.infrastructure.persistence.repositories import (
        CredentialRepository,
    )

    store = CredentialStore(
        repository=CredentialRepository(session=session),
        encryption=get_encryption_service(),
        logger=get_logger(),
    )
    return CredentialManager(store)


def build_price_refresh_service(session: AsyncSession) -> "PriceRefreshService":
    """Price refresh service bound to a database session.

    Mock mode is decided by configuration alone: it is on only when no
    provider API key is set.
    """
    from networth.application.services.price_refresh_service import (
        PriceRefreshService,
    )
    from networth.infrastructure.persistence.repositories import (
        StockPriceRepository,
    )

    return PriceRefreshService(
        price_repository=StockPriceRepository(session=session),
        providers=get_price_providers(),
        mock_provider=get_mock_price_provider(),
        budget=get_call_budget(),
        market_hours=get_market_hours_service(),
        logger=get_logger(),
        use_mock=get_settings().use_mock_prices,
        primary_provider=get_settings().primary_price_provider,
    )

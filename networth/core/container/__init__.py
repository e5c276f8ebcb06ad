"""Container module - Centralized dependency injection.

The container is organized into modules:
- infrastructure: App-scoped singletons (logging, encryption, db, budgets,
  providers)
- services: Session-bound application service builders

Usage:
    from networth.core.container import get_database, build_credential_manager
"""

from networth.core.container.infrastructure import (
    get_call_budget,
    get_database,
    get_encryption_service,
    get_logger,
    get_market_hours_service,
    get_mock_price_provider,
    get_price_providers,
)
from networth.core.container.services import (
    build_credential_manager,
    build_price_refresh_service,
)

__all__ = [
    "build_credential_manager",
    "build_price_refresh_service",
    "get_call_budget",
    "get_database",
    "get_encryption_service",
    "get_logger",
    "get_market_hours_service",
    "get_mock_price_provider",
    "get_price_providers",
]

"""Application services.

Usage:
    from networth.application.services import CredentialManager, PriceRefreshService
"""

from networth.application.services.credential_manager import CredentialManager
from networth.application.services.credential_store import CredentialStore
from networth.application.services.market_hours_service import MarketHoursService
from networth.application.services.price_refresh_service import PriceRefreshService

__all__ = [
    "CredentialManager",
    "CredentialStore",
    "MarketHoursService",
    "PriceRefreshService",
]

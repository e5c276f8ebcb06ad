"""Domain enums package.

Usage:
    from networth.domain.enums import CredentialType, ServiceType, PriceSource
"""

from networth.domain.enums.cache_state import CacheState
from networth.domain.enums.credential_type import CredentialType
from networth.domain.enums.market_session import MarketSession
from networth.domain.enums.price_source import PriceSource
from networth.domain.enums.service_type import ServiceType

__all__ = [
    "CacheState",
    "CredentialType",
    "MarketSession",
    "PriceSource",
    "ServiceType",
]

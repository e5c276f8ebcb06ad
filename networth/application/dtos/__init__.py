"""Data Transfer Objects (DTOs) for application layer.

DTOs are result dataclasses returned by application services.

Usage:
    from networth.application.dtos import PriceResult, FreshnessReport
"""

from networth.application.dtos.market_dtos import MarketStatus
from networth.application.dtos.price_dtos import (
    FreshnessReport,
    PriceRefreshSummary,
    PriceResult,
    PriceUpdateResult,
)

__all__ = [
    "FreshnessReport",
    "MarketStatus",
    "PriceRefreshSummary",
    "PriceResult",
    "PriceUpdateResult",
]

"""Repository implementations (adapters).

Usage:
    from networth.infrastructure.persistence.repositories import StockPriceRepository
"""

from networth.infrastructure.persistence.repositories.credential_repository import (
    CredentialRepository,
)
from networth.infrastructure.persistence.repositories.stock_price_repository import (
    StockPriceRepository,
)

__all__ = ["CredentialRepository", "StockPriceRepository"]

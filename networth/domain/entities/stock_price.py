"""Stock price cache entry.

Entries are append-only. The current price of a symbol is its entry with
the greatest timestamp; older entries remain as history.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from networth.domain.enums.price_source import PriceSource


@dataclass(frozen=True, slots=True, kw_only=True)
class StockPrice:
    """Cached price for a symbol.

    Attributes:
        symbol: Normalized ticker symbol.
        price: Positive price.
        timestamp: When the price was fetched and cached.
        source: Provider tag (twelvedata, alphavantage, mock).
        id: Database identifier (None until persisted).
    """

    symbol: str
    price: Decimal
    timestamp: datetime
    source: PriceSource
    id: int | None = None

    def __post_init__(self) -> None:
        """Validate entry after initialization.

        Raises:
            ValueError: If symbol is empty or price is not positive.
        """
        if not self.symbol:
            raise ValueError("symbol cannot be empty")
        if self.price <= 0:
            raise ValueError(f"price must be positive, got {self.price}")

    def age(self, now: datetime | None = None) -> timedelta:
        """Time elapsed since the entry was cached."""
        return (now or datetime.now(UTC)) - self.timestamp

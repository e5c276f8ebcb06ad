"""Price quote value object.

A single observation returned by a price provider, before it is cached.

Usage:
    from networth.domain.value_objects import PriceQuote

    quote = PriceQuote(
        symbol="AAPL",
        price=Decimal("201.45"),
        source=PriceSource.TWELVE_DATA,
    )
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from networth.domain.enums.price_source import PriceSource


@dataclass(frozen=True, slots=True, kw_only=True)
class PriceQuote:
    """Price observed by a provider.

    Attributes:
        symbol: Normalized ticker symbol.
        price: Positive price.
        source: Provider the quote came from.
        observed_at: Provider's own observation time, when reported.
    """

    symbol: str
    price: Decimal
    source: PriceSource
    observed_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate quote after initialization.

        Raises:
            ValueError: If the price is not a finite positive number.
        """
        if not self.price.is_finite() or self.price <= 0:
            raise ValueError(f"price must be positive, got {self.price}")

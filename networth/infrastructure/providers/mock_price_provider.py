"""Deterministic mock price provider.

Used only when no provider API key is configured (development). Known
symbols return a fixed table price; anything else hashes to a stable
price in [10, 500). The same symbol always yields the same price.
"""

import hashlib
from datetime import UTC, datetime
from decimal import Decimal

import structlog

from networth.core.result import Result, Success
from networth.domain.enums.price_source import PriceSource
from networth.domain.errors import ProviderError
from networth.domain.value_objects.price_quote import PriceQuote

logger = structlog.get_logger(__name__)

MOCK_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("190.50"),
    "MSFT": Decimal("380.25"),
    "GOOGL": Decimal("140.75"),
    "GOOG": Decimal("140.75"),
    "AMZN": Decimal("155.30"),
    "TSLA": Decimal("245.80"),
    "META": Decimal("325.40"),
    "NVDA": Decimal("450.60"),
    "NFLX": Decimal("485.20"),
    "CRM": Decimal("210.40"),
    "ORCL": Decimal("115.80"),
    "ADBE": Decimal("520.30"),
    "INTC": Decimal("45.60"),
    "AMD": Decimal("125.90"),
    "IBM": Decimal("189.00"),
    "JPM": Decimal("155.40"),
    "BAC": Decimal("32.80"),
    "WFC": Decimal("42.60"),
    "GS": Decimal("365.20"),
    "MS": Decimal("85.40"),
    "COST": Decimal("720.80"),
    "WMT": Decimal("165.20"),
    "HD": Decimal("325.60"),
    "PG": Decimal("155.90"),
    "JNJ": Decimal("160.40"),
    "V": Decimal("255.30"),
    "MA": Decimal("425.80"),
    "UNH": Decimal("520.90"),
    "KO": Decimal("59.80"),
    "PEP": Decimal("175.20"),
}

_MIN_PRICE_CENTS = 1_000
_PRICE_SPAN_CENTS = 49_000


def mock_price_for(symbol: str) -> Decimal:
    """Deterministic price for a symbol.

    Args:
        symbol: Normalized ticker symbol.

    Returns:
        Table price for known symbols, otherwise a hash-derived price
        in [10.00, 500.00).
    """
    if symbol in MOCK_PRICES:
        return MOCK_PRICES[symbol]
    digest = hashlib.sha256(symbol.encode("utf-8")).digest()
    cents = _MIN_PRICE_CENTS + int.from_bytes(digest[:8], "big") % _PRICE_SPAN_CENTS
    return Decimal(cents) / 100


class MockPriceProvider:
    """PriceProviderProtocol implementation that never calls out."""

    @property
    def name(self) -> str:
        return PriceSource.MOCK.value

    @property
    def source(self) -> PriceSource:
        return PriceSource.MOCK

    async def fetch_price(
        self, symbol: str, *, intraday: bool = False
    ) -> Result[PriceQuote, ProviderError]:
        """Return the deterministic mock price for a symbol."""
        price = mock_price_for(symbol)
        logger.debug("mock_price_generated", symbol=symbol, price=str(price))
        return Success(
            value=PriceQuote(
                symbol=symbol,
                price=price,
                source=PriceSource.MOCK,
                observed_at=datetime.now(UTC),
            )
        )

"""Price provider protocol.

Port every market data source implements: Twelve Data, Alpha Vantage and
the deterministic mock provider. The refresh service only knows this
interface.

Usage:
    async def refresh(provider: PriceProviderProtocol) -> None:
        match await provider.fetch_price("AAPL"):
            case Success(value=quote):
                ...
            case Failure(error=ProviderRateLimitError()):
                ...
"""

from typing import Protocol

from networth.core.result import Result
from networth.domain.enums.price_source import PriceSource
from networth.domain.errors.provider_error import ProviderError
from networth.domain.value_objects.price_quote import PriceQuote


class PriceProviderProtocol(Protocol):
    """Source of current stock prices.

    Attributes:
        name: Provider name used for budgets and logs.
        source: Tag persisted with cached prices.
    """

    @property
    def name(self) -> str:
        """Provider name (twelvedata, alphavantage, mock)."""
        ...

    @property
    def source(self) -> PriceSource:
        """Cache tag for prices from this provider."""
        ...

    async def fetch_price(
        self, symbol: str, *, intraday: bool = False
    ) -> Result[PriceQuote, ProviderError]:
        """Fetch the current price of a symbol.

        Args:
            symbol: Normalized ticker symbol.
            intraday: Prefer a live intraday price over the last close.
                Set while the market is open or on a forced refresh;
                providers whose quote is always live ignore it.

        Returns:
            Success(PriceQuote) with a positive price.
            Failure(ProviderError) subclass describing the failure.
        """
        ...

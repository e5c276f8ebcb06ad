"""Price cache error types."""

from dataclasses import dataclass

from networth.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PriceError(DomainError):
    """Price cache failure (read or write against stock_prices).

    Attributes:
        symbol: Ticker symbol involved.
    """

    symbol: str


@dataclass(frozen=True, slots=True, kw_only=True)
class PriceDataUnavailableError(PriceError):
    """No price can be served: no cache entry and no provider succeeded.

    Terminal for the request. A price is never fabricated in this case.

    Attributes:
        attempted_providers: Providers tried (or skipped) in order.
    """

    attempted_providers: tuple[str, ...] = ()

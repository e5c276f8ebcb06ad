"""Origin tag of a cached stock price."""

from enum import Enum


class PriceSource(str, Enum):
    """Where a cached price came from.

    Values are persisted in `stock_prices.source` and double as the
    provider names used in configuration and call budgets.
    """

    TWELVE_DATA = "twelvedata"
    ALPHA_VANTAGE = "alphavantage"
    MOCK = "mock"

    @property
    def display_name(self) -> str:
        """Human readable provider name.

        Returns:
            str: Display name (e.g., "Twelve Data").
        """
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    PriceSource.TWELVE_DATA: "Twelve Data",
    PriceSource.ALPHA_VANTAGE: "Alpha Vantage",
    PriceSource.MOCK: "Mock Price Provider",
}

"""Price provider adapters.

Usage:
    from networth.infrastructure.providers import TwelveDataClient, MockPriceProvider
"""

from networth.infrastructure.providers.alpha_vantage import AlphaVantageClient
from networth.infrastructure.providers.mock_price_provider import MockPriceProvider
from networth.infrastructure.providers.twelve_data import TwelveDataClient

__all__ = ["AlphaVantageClient", "MockPriceProvider", "TwelveDataClient"]

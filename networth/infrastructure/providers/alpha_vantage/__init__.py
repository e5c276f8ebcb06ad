"""Alpha Vantage provider."""

from networth.infrastructure.providers.alpha_vantage.alpha_vantage_client import (
    AlphaVantageClient,
)

__all__ = ["AlphaVantageClient"]

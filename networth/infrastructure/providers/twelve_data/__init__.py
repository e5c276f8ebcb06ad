"""Twelve Data provider."""

from networth.infrastructure.providers.twelve_data.twelve_data_client import (
    TwelveDataClient,
)

__all__ = ["TwelveDataClient"]

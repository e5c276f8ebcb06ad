"""Provider call budget tracking."""

from networth.infrastructure.rate_limit.call_budget import ProviderCallBudget

__all__ = ["ProviderCallBudget"]

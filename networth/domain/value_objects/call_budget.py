"""Provider call budget value objects.

ProviderLimits configures how many outbound calls a price provider may
receive; BudgetSnapshot reports how much of that allowance is used.

Usage:
    from networth.domain.value_objects import ProviderLimits

    limits = {
        "twelvedata": ProviderLimits(daily_limit=800, per_minute_limit=8),
        "alphavantage": ProviderLimits(daily_limit=25, per_minute_limit=5),
    }
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderLimits:
    """Call allowance for one provider.

    Attributes:
        daily_limit: Calls allowed per market-timezone calendar day.
        per_minute_limit: Calls allowed per 60-second window.
    """

    daily_limit: int
    per_minute_limit: int

    def __post_init__(self) -> None:
        """Validate limits after initialization.

        Raises:
            ValueError: If either limit is not positive.
        """
        if self.daily_limit <= 0 or self.per_minute_limit <= 0:
            raise ValueError("provider limits must be positive")


@dataclass(frozen=True, slots=True, kw_only=True)
class BudgetSnapshot:
    """Point-in-time usage of a provider's budget.

    Attributes:
        provider: Provider name.
        daily_used: Calls made today.
        daily_limit: Calls allowed today.
        minute_used: Calls made in the current window.
        per_minute_limit: Calls allowed per window.
    """

    provider: str
    daily_used: int
    daily_limit: int
    minute_used: int
    per_minute_limit: int

    @property
    def daily_remaining(self) -> int:
        """Calls still allowed today."""
        return max(self.daily_limit - self.daily_used, 0)

    @property
    def minute_remaining(self) -> int:
        """Calls still allowed in the current window."""
        return max(self.per_minute_limit - self.minute_used, 0)

    @property
    def exhausted(self) -> bool:
        """True when no further call is allowed right now."""
        return self.daily_remaining == 0 or self.minute_remaining == 0

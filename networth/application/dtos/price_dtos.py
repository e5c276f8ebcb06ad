"""Price refresh DTOs (Data Transfer Objects).

Result dataclasses returned by the price refresh service to the
(excluded) presentation layer.

DTOs:
    - PriceResult: Outcome of a single symbol refresh
    - PriceUpdateResult: Per-symbol line of a bulk refresh
    - PriceRefreshSummary: Result of a bulk refresh
    - FreshnessReport: Cache freshness and provider budget status
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from networth.domain.enums import CacheState, PriceSource
from networth.domain.value_objects.call_budget import BudgetSnapshot


@dataclass
class PriceResult:
    """Price served for a symbol.

    Attributes:
        symbol: Normalized ticker symbol.
        price: Price served.
        timestamp: Cache timestamp of the served entry.
        source: Provider that produced the price.
        cache_state: Cache state observed when the decision was made.
        decision: Branch that produced the price (fresh_cache, mock,
            primary, fallback, stale_cache).
        from_cache: True if no provider was called successfully.
        is_stale: True when a stale entry was served after providers failed.
        observed_at: Provider observation time, for freshly fetched prices.
    """

    symbol: str
    price: Decimal
    timestamp: datetime
    source: PriceSource
    cache_state: CacheState
    decision: str
    from_cache: bool
    is_stale: bool = False
    observed_at: datetime | None = None


@dataclass
class PriceUpdateResult:
    """Per-symbol outcome of a bulk refresh.

    Attributes:
        symbol: Symbol as normalized (or as given, if invalid).
        updated: True if a current price was obtained.
        old_price: Latest cached price before the refresh.
        new_price: Price served by the refresh.
        source: Source of new_price.
        from_cache: True if new_price came from the cache.
        error: Human readable failure, if any.
        error_type: rate_limited, no_data, provider_error, invalid_symbol
            or cache_error.
        price_change: new_price - old_price.
        price_change_pct: Percentage change, two decimal places.
        previous_cache_age: Age of the previous entry ("45s", "12m", "1.5h").
    """

    symbol: str
    updated: bool
    old_price: Decimal | None = None
    new_price: Decimal | None = None
    source: PriceSource | None = None
    from_cache: bool = False
    error: str | None = None
    error_type: str | None = None
    price_change: Decimal | None = None
    price_change_pct: Decimal | None = None
    previous_cache_age: str | None = None


@dataclass
class PriceRefreshSummary:
    """Result of a bulk refresh.

    Attributes:
        total_symbols: Symbols processed.
        updated_symbols: Symbols with updated=True.
        failed_symbols: Symbols with updated=False.
        provider_name: Display name(s) of providers that served prices.
        timestamp: When the refresh finished.
        duration_ms: Wall-clock duration.
        results: Per-symbol results in processing order.
    """

    total_symbols: int
    updated_symbols: int
    failed_symbols: int
    provider_name: str
    timestamp: datetime
    duration_ms: int
    results: list[PriceUpdateResult] = field(default_factory=list)


@dataclass
class FreshnessReport:
    """Price cache status.

    Attributes:
        provider_name: Display name of the provider in use.
        mock_mode: True when no provider key is configured.
        market_open: Whether the market is open now.
        freshness_threshold_minutes: Current max cache age.
        last_update: Newest cache timestamp across all symbols.
        cache_age_minutes: Minutes since last_update.
        is_stale: True if the newest entry exceeds the threshold.
        force_refresh_recommended: True if a refresh is due.
        tracked_symbols: Symbols with at least one cache entry.
        stale_symbols: Symbols whose newest entry exceeds the threshold.
        seconds_until_next_refresh: 0 when a refresh is allowed now.
        budgets: Per-provider call budget usage.
    """

    provider_name: str
    mock_mode: bool
    market_open: bool
    freshness_threshold_minutes: int
    last_update: datetime | None
    cache_age_minutes: int | None
    is_stale: bool
    force_refresh_recommended: bool
    tracked_symbols: int
    stale_symbols: int
    seconds_until_next_refresh: int
    budgets: dict[str, BudgetSnapshot] = field(default_factory=dict)

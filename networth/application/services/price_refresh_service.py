"""Price refresh service.

Serves the current price of a symbol from the cache when it is fresh
enough and otherwise refreshes it from the configured providers, under
per-provider call budgets.

Decision order for one symbol:
    1. fresh cache (and not forced)       → cached price, no outbound call
    2. mock mode (no provider key at all) → deterministic mock price
    3. primary provider, if budget allows → fetched price
    4. fallback provider, if budget allows → fetched price
    5. any cache entry, however old       → stale price (is_stale=True)
    6. otherwise                          → RateLimited or NoData failure

A price is never fabricated outside mock mode. Every outcome is logged
with a `decision` field.
"""

import re
import time
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from networth.application.dtos.price_dtos import (
    FreshnessReport,
    PriceRefreshSummary,
    PriceResult,
    PriceUpdateResult,
)
from networth.application.services.market_hours_service import MarketHoursService
from networth.core.constants import MAX_SYMBOL_LENGTH
from networth.core.enums import ErrorCode
from networth.core.errors import DomainError, ValidationError
from networth.core.result import Failure, Result, Success
from networth.domain.entities.stock_price import StockPrice
from networth.domain.enums import CacheState, PriceSource
from networth.domain.errors import (
    PriceDataUnavailableError,
    PriceError,
    ProviderRateLimitError,
)
from networth.domain.protocols import (
    CallBudgetProtocol,
    LoggerProtocol,
    PriceProviderProtocol,
    StockPriceRepository,
)
from networth.domain.value_objects.price_quote import PriceQuote

SYMBOL_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9.\-]*$")

DECISION_FRESH_CACHE = "fresh_cache"
DECISION_MOCK = "mock"
DECISION_PRIMARY = "primary"
DECISION_FALLBACK = "fallback"
DECISION_STALE_CACHE = "stale_cache"
DECISION_NO_DATA = "no_data"
DECISION_RATE_LIMITED = "rate_limited"

PROVIDER_ROLES = (DECISION_PRIMARY, DECISION_FALLBACK)

_CENT = Decimal("0.01")


def _utc_now() -> datetime:
    return datetime.now(UTC)


def normalize_symbol(symbol: str) -> Result[str, ValidationError]:
    """Strip and upper-case a ticker symbol.

    Returns:
        Success(str) with the normalized symbol.
        Failure(ValidationError) with code INVALID_SYMBOL if the result is
        empty, too long, or contains characters outside A-Z 0-9 . -
    """
    normalized = symbol.strip().upper() if symbol else ""
    if not normalized:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_SYMBOL,
                message="Symbol cannot be empty",
                field="symbol",
            )
        )
    if len(normalized) > MAX_SYMBOL_LENGTH or not SYMBOL_PATTERN.match(normalized):
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_SYMBOL,
                message=f"Invalid symbol: {normalized}",
                field="symbol",
            )
        )
    return Success(value=normalized)


class PriceRefreshService:
    """Price cache and provider orchestrator.

    Dependencies (injected via constructor):
        - StockPriceRepository: Append-only price cache
        - providers: Outbound providers in priority order (primary first)
        - mock_provider: Provider used in mock mode
        - CallBudgetProtocol: Per-provider call allowance
        - MarketHoursService: Freshness threshold
        - LoggerProtocol: Structured logging

    Args:
        use_mock: Serve mock prices (no provider key configured).
        primary_provider: Name of the configured primary provider. Any other
            provider is logged as the fallback. Defaults to the first one.
        clock: Returns the current aware datetime.
    """

    def __init__(
        self,
        *,
        price_repository: StockPriceRepository,
        providers: Sequence[PriceProviderProtocol],
        mock_provider: PriceProviderProtocol,
        budget: CallBudgetProtocol,
        market_hours: MarketHoursService,
        logger: LoggerProtocol,
        use_mock: bool = False,
        primary_provider: str | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if len(providers) > len(PROVIDER_ROLES):
            raise ValueError("at most a primary and a fallback provider are supported")
        self._prices = price_repository
        self._providers = tuple(providers)
        self._mock_provider = mock_provider
        self._budget = budget
        self._market_hours = market_hours
        self._logger = logger
        self._use_mock = use_mock
        self._clock = clock
        if primary_provider is None and self._providers:
            primary_provider = self._providers[0].name
        self._primary_provider = primary_provider

    @property
    def provider_name(self) -> str:
        """Display name of the provider currently in use."""
        if self._use_mock or not self._providers:
            return PriceSource.MOCK.display_name
        return self._providers[0].source.display_name

    async def refresh_symbol(
        self, symbol: str, *, force: bool = False
    ) -> Result[PriceResult, DomainError]:
        """Serve the current price of a symbol.

        Args:
            symbol: Ticker symbol (normalized here).
            force: Skip the fresh-cache short circuit.

        Returns:
            Success(PriceResult): Cached, fetched, mock or stale price.
            Failure(ValidationError): Invalid symbol.
            Failure(ProviderRateLimitError): Every provider was rate limited
                and nothing is cached.
            Failure(PriceDataUnavailableError): No provider succeeded and
                nothing is cached.
            Failure(PriceError): The fetched price could not be cached.
        """
        match normalize_symbol(symbol):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=normalized):
                symbol = normalized

        now = self._clock()
        cached = await self._prices.find_latest(symbol)
        state = self._cache_state(cached, now)
        log = self._logger.bind(symbol=symbol, cache_state=state.value, force=force)

        if cached is not None and state is CacheState.FRESH and not force:
            log.info(
                "price_served_from_cache",
                decision=DECISION_FRESH_CACHE,
                source=cached.source.value,
                cache_age_seconds=int(cached.age(now).total_seconds()),
            )
            return Success(
                value=self._from_cache(cached, state, DECISION_FRESH_CACHE, is_stale=False)
            )

        if self._use_mock:
            match await self._mock_provider.fetch_price(symbol):
                case Success(value=quote):
                    return await self._cache_quote(quote, state, DECISION_MOCK, log)
                case Failure(error=error):
                    log.error(
                        "mock_price_failed",
                        decision=DECISION_MOCK,
                        error_code=error.code.value,
                    )

        attempted: list[str] = []
        rate_limited_only = True

        intraday = force or self._market_hours.is_market_open(now)

        for provider in self._providers:
            role = self._role_of(provider)
            attempted.append(provider.name)

            if not self._budget.try_acquire(provider.name):
                log.warning(
                    "price_provider_budget_exhausted",
                    provider=provider.name,
                    role=role,
                    decision=f"{role}_skipped",
                )
                continue

            match await provider.fetch_price(symbol, intraday=intraday):
                case Success(value=quote):
                    return await self._cache_quote(quote, state, role, log)
                case Failure(error=error):
                    if not isinstance(error, ProviderRateLimitError):
                        rate_limited_only = False
                    log.warning(
                        "price_provider_failed",
                        provider=provider.name,
                        role=role,
                        decision=f"{role}_failed",
                        error_code=error.code.value,
                        error_message=error.message,
                    )

        if cached is not None:
            log.warning(
                "price_served_stale",
                decision=DECISION_STALE_CACHE,
                source=cached.source.value,
                attempted_providers=attempted,
                cache_age_seconds=int(cached.age(now).total_seconds()),
            )
            return Success(
                value=self._from_cache(cached, state, DECISION_STALE_CACHE, is_stale=True)
            )

        if attempted and rate_limited_only:
            log.error(
                "price_unavailable",
                decision=DECISION_RATE_LIMITED,
                attempted_providers=attempted,
            )
            return Failure(
                error=ProviderRateLimitError(
                    code=ErrorCode.PROVIDER_RATE_LIMITED,
                    message=(
                        "All price providers are rate limited; "
                        f"no cached price for {symbol}"
                    ),
                    provider_name=",".join(attempted),
                    details={"symbol": symbol},
                )
            )

        log.error(
            "price_unavailable",
            decision=DECISION_NO_DATA,
            attempted_providers=attempted,
        )
        return Failure(
            error=PriceDataUnavailableError(
                code=ErrorCode.PRICE_DATA_UNAVAILABLE,
                message=f"No price available for {symbol}",
                symbol=symbol,
                attempted_providers=tuple(attempted),
            )
        )

    async def refresh_many(
        self, symbols: Iterable[str] | None = None, *, force: bool = False
    ) -> PriceRefreshSummary:
        """Refresh several symbols sequentially.

        Args:
            symbols: Symbols to refresh; every cached symbol when None.
            force: Skip the fresh-cache short circuit for each symbol.

        Returns:
            PriceRefreshSummary with one PriceUpdateResult per distinct symbol.
        """
        started = time.perf_counter()
        if symbols is None:
            symbols = await self._prices.list_symbols()

        results: list[PriceUpdateResult] = []
        seen: set[str] = set()
        for raw in symbols:
            match normalize_symbol(raw):
                case Failure(error=error):
                    results.append(
                        PriceUpdateResult(
                            symbol=raw,
                            updated=False,
                            error=error.message,
                            error_type="invalid_symbol",
                        )
                    )
                    continue
                case Success(value=symbol):
                    pass
            if symbol in seen:
                continue
            seen.add(symbol)
            results.append(await self._update_one(symbol, force))

        updated = sum(1 for result in results if result.updated)
        summary = PriceRefreshSummary(
            total_symbols=len(results),
            updated_symbols=updated,
            failed_symbols=len(results) - updated,
            provider_name=self._served_by(results),
            timestamp=self._clock(),
            duration_ms=int((time.perf_counter() - started) * 1000),
            results=results,
        )
        self._logger.info(
            "price_refresh_completed",
            total_symbols=summary.total_symbols,
            updated_symbols=summary.updated_symbols,
            failed_symbols=summary.failed_symbols,
            provider_name=summary.provider_name,
            duration_ms=summary.duration_ms,
            force=force,
        )
        return summary

    async def get_status(self) -> FreshnessReport:
        """Report cache freshness, market state and provider budgets."""
        now = self._clock()
        threshold = self._market_hours.freshness_threshold(now)
        last_update = await self._prices.find_latest_update()

        cache_age_minutes: int | None = None
        is_stale = True
        if last_update is not None:
            age = now - last_update
            cache_age_minutes = int(age.total_seconds() // 60)
            is_stale = age > threshold

        return FreshnessReport(
            provider_name=self.provider_name,
            mock_mode=self._use_mock,
            market_open=self._market_hours.is_market_open(now),
            freshness_threshold_minutes=int(threshold.total_seconds() // 60),
            last_update=last_update,
            cache_age_minutes=cache_age_minutes,
            is_stale=is_stale,
            force_refresh_recommended=self._market_hours.should_refresh(last_update, now),
            tracked_symbols=len(await self._prices.list_symbols()),
            stale_symbols=await self._prices.count_stale_symbols(now - threshold),
            seconds_until_next_refresh=self._market_hours.seconds_until_next_refresh(
                last_update, now
            ),
            budgets=self._budget.snapshot(),
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _role_of(self, provider: PriceProviderProtocol) -> str:
        if provider.name == self._primary_provider:
            return DECISION_PRIMARY
        return DECISION_FALLBACK

    def _cache_state(self, cached: StockPrice | None, now: datetime) -> CacheState:
        if cached is None:
            return CacheState.NONE
        if cached.age(now) <= self._market_hours.freshness_threshold(now):
            return CacheState.FRESH
        return CacheState.STALE

    async def _cache_quote(
        self,
        quote: PriceQuote,
        state: CacheState,
        decision: str,
        log: LoggerProtocol,
    ) -> Result[PriceResult, DomainError]:
        entry = StockPrice(
            symbol=quote.symbol,
            price=quote.price,
            timestamp=self._clock(),
            source=quote.source,
        )
        saved = await self._prices.add(entry)
        if saved is None:
            log.error(
                "price_cache_write_failed",
                decision=decision,
                source=quote.source.value,
            )
            return Failure(
                error=PriceError(
                    code=ErrorCode.PRICE_CACHE_WRITE_FAILED,
                    message=f"Failed to cache price for {quote.symbol}",
                    symbol=quote.symbol,
                )
            )

        log.info(
            "price_refreshed",
            decision=decision,
            source=quote.source.value,
            price=str(quote.price),
        )
        return Success(
            value=PriceResult(
                symbol=saved.symbol,
                price=saved.price,
                timestamp=saved.timestamp,
                source=saved.source,
                cache_state=state,
                decision=decision,
                from_cache=False,
                observed_at=quote.observed_at,
            )
        )

    @staticmethod
    def _from_cache(
        cached: StockPrice, state: CacheState, decision: str, *, is_stale: bool
    ) -> PriceResult:
        return PriceResult(
            symbol=cached.symbol,
            price=cached.price,
            timestamp=cached.timestamp,
            source=cached.source,
            cache_state=state,
            decision=decision,
            from_cache=True,
            is_stale=is_stale,
        )

    async def _update_one(self, symbol: str, force: bool) -> PriceUpdateResult:
        previous = await self._prices.find_latest(symbol)
        result = PriceUpdateResult(
            symbol=symbol,
            updated=False,
            old_price=previous.price if previous else None,
            previous_cache_age=(
                format_cache_age(previous.age(self._clock())) if previous else None
            ),
        )

        match await self.refresh_symbol(symbol, force=force):
            case Success(value=price):
                result.new_price = price.price
                result.source = price.source
                result.from_cache = price.from_cache
                if price.is_stale:
                    result.error = "Price providers unavailable; served stale cached price"
                    result.error_type = "provider_error"
                else:
                    result.updated = True
                if previous is not None:
                    result.price_change = price.price - previous.price
                    result.price_change_pct = (
                        result.price_change / previous.price * 100
                    ).quantize(_CENT)
            case Failure(error=error):
                result.error = error.message
                result.error_type = _error_type(error)
        return result

    def _served_by(self, results: list[PriceUpdateResult]) -> str:
        sources: list[PriceSource] = []
        for result in results:
            if not result.updated or result.from_cache or result.source is None:
                continue
            if result.source not in sources:
                sources.append(result.source)
        if not sources:
            return self.provider_name
        return ", ".join(source.display_name for source in sources)


def _error_type(error: DomainError) -> str:
    match error:
        case ValidationError():
            return "invalid_symbol"
        case ProviderRateLimitError():
            return "rate_limited"
        case PriceDataUnavailableError():
            return "no_data"
        case PriceError():
            return "cache_error"
        case _:
            return "provider_error"


def format_cache_age(age: timedelta) -> str:
    """Render a cache age as "45s", "12m" or "1.5h"."""
    seconds = age.total_seconds()
    if seconds < 60:
        return f"{seconds:.0f}s"
    if seconds < 3600:
        return f"{seconds / 60:.0f}m"
    return f"{seconds / 3600:.1f}h"

"""In-memory test doubles for domain protocols.

Fakes implement the protocols structurally so services can be exercised
without a database, HTTP or structlog configuration.
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Any

from networth.core.enums import ErrorCode
from networth.core.result import Failure, Result, Success
from networth.domain.entities.credential import Credential
from networth.domain.entities.stock_price import StockPrice
from networth.domain.enums import PriceSource, ServiceType
from networth.domain.errors import (
    ProviderError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)
from networth.domain.value_objects.price_quote import PriceQuote


class MutableClock:
    """Clock whose current time is set by the test."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@dataclass
class LogRecord:
    level: str
    event: str
    context: dict[str, Any]


class RecordingLogger:
    """LoggerProtocol implementation that keeps every call."""

    def __init__(
        self,
        records: list[LogRecord] | None = None,
        bound: dict[str, Any] | None = None,
    ) -> None:
        self.records = records if records is not None else []
        self._bound = bound or {}

    def _record(self, level: str, event: str, context: dict[str, Any]) -> None:
        self.records.append(LogRecord(level, event, {**self._bound, **context}))

    def debug(self, message: str, /, **context: Any) -> None:
        self._record("debug", message, context)

    def info(self, message: str, /, **context: Any) -> None:
        self._record("info", message, context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._record("warning", message, context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        if error is not None:
            context["error_type"] = type(error).__name__
        self._record("error", message, context)

    def bind(self, **context: Any) -> "RecordingLogger":
        return RecordingLogger(self.records, {**self._bound, **context})

    def events(self, level: str | None = None) -> list[str]:
        return [r.event for r in self.records if level is None or r.level == level]

    def find(self, event: str) -> LogRecord:
        for record in self.records:
            if record.event == event:
                return record
        raise AssertionError(f"no log record for {event!r}: {self.events()}")


class InMemoryCredentialRepository:
    """CredentialRepository backed by a list; enforces one active row per service."""

    def __init__(self) -> None:
        self.rows: list[Credential] = []
        self.fail_with: Exception | None = None
        self.fail_touch = False
        self.duplicate_on_add = False
        self._next_id = 1

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def find_active_by_service(
        self, service_type: ServiceType
    ) -> Credential | None:
        self._maybe_fail()
        for row in self.rows:
            if row.service_type is service_type and row.is_active:
                return replace(row)
        return None

    async def list_active(self) -> list[Credential]:
        self._maybe_fail()
        active = [replace(row) for row in self.rows if row.is_active]
        return sorted(active, key=lambda c: c.service_type.value)

    async def add(self, credential: Credential) -> Credential | None:
        self._maybe_fail()
        if self.duplicate_on_add:
            return None
        if any(
            row.service_type is credential.service_type and row.is_active
            for row in self.rows
        ):
            return None
        saved = replace(credential, id=self._next_id)
        self._next_id += 1
        self.rows.append(saved)
        return replace(saved)

    async def update(self, credential: Credential) -> None:
        self._maybe_fail()
        for index, row in enumerate(self.rows):
            if row.id == credential.id:
                self.rows[index] = replace(credential)
                return
        raise LookupError(f"credential {credential.id} not found")

    async def touch_last_used(self, credential_id: int, when: datetime) -> None:
        if self.fail_touch:
            raise RuntimeError("database is locked")
        for row in self.rows:
            if row.id == credential_id:
                row.last_used = when


class InMemoryStockPriceRepository:
    """Append-only StockPriceRepository backed by a list."""

    def __init__(self, rows: list[StockPrice] | None = None) -> None:
        self.rows: list[StockPrice] = list(rows or [])
        self.fail_writes = False
        self._next_id = len(self.rows) + 1

    def seed(
        self,
        symbol: str,
        price: str,
        timestamp: datetime,
        source: PriceSource = PriceSource.TWELVE_DATA,
    ) -> StockPrice:
        entry = StockPrice(
            symbol=symbol,
            price=Decimal(price),
            timestamp=timestamp,
            source=source,
            id=self._next_id,
        )
        self._next_id += 1
        self.rows.append(entry)
        return entry

    async def find_latest(self, symbol: str) -> StockPrice | None:
        matches = [row for row in self.rows if row.symbol == symbol]
        if not matches:
            return None
        return max(matches, key=lambda row: row.timestamp)

    async def add(self, price: StockPrice) -> StockPrice | None:
        if self.fail_writes:
            return None
        saved = replace(price, id=self._next_id)
        self._next_id += 1
        self.rows.append(saved)
        return saved

    async def find_latest_update(self) -> datetime | None:
        if not self.rows:
            return None
        return max(row.timestamp for row in self.rows)

    async def list_symbols(self) -> list[str]:
        return sorted({row.symbol for row in self.rows})

    async def count_stale_symbols(self, older_than: datetime) -> int:
        latest: dict[str, datetime] = {}
        for row in self.rows:
            if row.symbol not in latest or row.timestamp > latest[row.symbol]:
                latest[row.symbol] = row.timestamp
        return sum(1 for ts in latest.values() if ts < older_than)


@dataclass
class FakeProvider:
    """PriceProviderProtocol double returning a fixed price or error."""

    source: PriceSource
    price: Decimal | None = None
    error: ProviderError | None = None
    calls: list[str] = field(default_factory=list)
    intraday_flags: list[bool] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.source.value

    async def fetch_price(
        self, symbol: str, *, intraday: bool = False
    ) -> Result[PriceQuote, ProviderError]:
        self.calls.append(symbol)
        self.intraday_flags.append(intraday)
        if self.error is not None:
            return Failure(error=self.error)
        assert self.price is not None
        return Success(
            value=PriceQuote(
                symbol=symbol,
                price=self.price,
                source=self.source,
                observed_at=datetime(2024, 1, 5, 20, 0, tzinfo=UTC),
            )
        )


class FakeBudget:
    """CallBudgetProtocol double with a set of exhausted providers."""

    def __init__(self, exhausted: set[str] | None = None) -> None:
        self.exhausted = exhausted or set()
        self.acquired: list[str] = []

    def try_acquire(self, provider: str) -> bool:
        if provider in self.exhausted:
            return False
        self.acquired.append(provider)
        return True

    def remaining(self, provider: str) -> int:
        return 0 if provider in self.exhausted else -1

    def snapshot(self) -> dict:
        return {}

    def reset(self, provider: str | None = None) -> None:
        self.exhausted.clear()


def rate_limited(provider: PriceSource) -> ProviderRateLimitError:
    return ProviderRateLimitError(
        code=ErrorCode.PROVIDER_RATE_LIMITED,
        message=f"{provider.display_name} API rate limit exceeded",
        provider_name=provider.value,
    )


def unavailable(provider: PriceSource) -> ProviderUnavailableError:
    return ProviderUnavailableError(
        code=ErrorCode.PROVIDER_UNAVAILABLE,
        message=f"{provider.display_name} API request timed out",
        provider_name=provider.value,
    )

"""In-process provider call budget implementing CallBudgetProtocol.

Tracks two counters per provider:
- calls made today (resets at midnight in the market timezone)
- calls made in the current 60-second window (fixed window)

The tracker is the only shared mutable state in the price subsystem. Every
read-modify-write happens under one threading.Lock so concurrent refreshes
can never push a counter past its limit.

Usage:
    from networth.core.container import get_call_budget

    budget = get_call_budget()
    if budget.try_acquire("twelvedata"):
        ...  # make exactly one outbound call
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from networth.core.constants import RATE_WINDOW_SECONDS
from networth.domain.value_objects.call_budget import BudgetSnapshot, ProviderLimits


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class _Usage:
    day: date
    daily_used: int = 0
    window_start: datetime | None = None
    minute_used: int = 0


class ProviderCallBudget:
    """Daily and per-minute call allowance per price provider.

    Providers without configured limits are unlimited.

    Args:
        limits: Provider name -> ProviderLimits.
        timezone: IANA zone whose midnight resets the daily counter.
        clock: Returns the current aware datetime (injectable for tests).
    """

    def __init__(
        self,
        limits: Mapping[str, ProviderLimits],
        *,
        timezone: str = "America/New_York",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._limits = dict(limits)
        self._tz = ZoneInfo(timezone)
        self._clock = clock
        self._window = timedelta(seconds=RATE_WINDOW_SECONDS)
        self._usage: dict[str, _Usage] = {}
        self._lock = threading.Lock()

    def try_acquire(self, provider: str) -> bool:
        """Reserve one call for a provider if both counters allow it.

        Args:
            provider: Provider name.

        Returns:
            True if the call was reserved, False if either limit is reached.
        """
        limits = self._limits.get(provider)
        if limits is None:
            return True

        with self._lock:
            now = self._clock()
            usage = self._current_usage(provider, now)
            if usage.daily_used >= limits.daily_limit:
                return False
            if usage.minute_used >= limits.per_minute_limit:
                return False
            usage.daily_used += 1
            usage.minute_used += 1
            return True

    def remaining(self, provider: str) -> int:
        """Calls available right now for a provider.

        Returns:
            Smaller of daily and per-minute remaining; -1 if unlimited.
        """
        snapshot = self._snapshot_for(provider)
        if snapshot is None:
            return -1
        return min(snapshot.daily_remaining, snapshot.minute_remaining)

    def snapshot(self) -> dict[str, BudgetSnapshot]:
        """Usage of every configured provider keyed by name."""
        snapshots: dict[str, BudgetSnapshot] = {}
        for provider in self._limits:
            snapshot = self._snapshot_for(provider)
            if snapshot is not None:
                snapshots[provider] = snapshot
        return snapshots

    def reset(self, provider: str | None = None) -> None:
        """Clear counters for one provider, or all providers when None."""
        with self._lock:
            if provider is None:
                self._usage.clear()
            else:
                self._usage.pop(provider, None)

    def _snapshot_for(self, provider: str) -> BudgetSnapshot | None:
        limits = self._limits.get(provider)
        if limits is None:
            return None
        with self._lock:
            usage = self._current_usage(provider, self._clock())
            return BudgetSnapshot(
                provider=provider,
                daily_used=usage.daily_used,
                daily_limit=limits.daily_limit,
                minute_used=usage.minute_used,
                per_minute_limit=limits.per_minute_limit,
            )

    def _current_usage(self, provider: str, now: datetime) -> _Usage:
        # Caller holds the lock.
        today = now.astimezone(self._tz).date()
        usage = self._usage.get(provider)
        if usage is None or usage.day != today:
            usage = _Usage(day=today)
            self._usage[provider] = usage

        if usage.window_start is None or now - usage.window_start >= self._window:
            usage.window_start = now
            usage.minute_used = 0
        return usage

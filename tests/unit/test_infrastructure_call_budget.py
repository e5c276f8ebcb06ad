"""Unit tests for ProviderCallBudget.

Uses an injected clock so window and day rollover are deterministic.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime

import pytest

from networth.domain.value_objects import ProviderLimits
from networth.infrastructure.rate_limit import ProviderCallBudget
from tests.utils.fakes import MutableClock

# Friday 2024-01-05 15:00 UTC = 10:00 New York
START = datetime(2024, 1, 5, 15, 0, tzinfo=UTC)


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock(START)


@pytest.fixture
def budget(clock) -> ProviderCallBudget:
    return ProviderCallBudget(
        {
            "twelvedata": ProviderLimits(daily_limit=800, per_minute_limit=8),
            "alphavantage": ProviderLimits(daily_limit=3, per_minute_limit=2),
        },
        clock=clock,
    )


@pytest.mark.unit
class TestPerMinuteLimit:
    """Fixed 60-second window."""

    def test_allows_up_to_per_minute_limit(self, budget):
        granted = [budget.try_acquire("twelvedata") for _ in range(9)]

        assert granted == [True] * 8 + [False]

    def test_window_resets_after_60_seconds(self, budget, clock):
        for _ in range(8):
            budget.try_acquire("twelvedata")
        assert budget.try_acquire("twelvedata") is False

        clock.advance(seconds=59)
        assert budget.try_acquire("twelvedata") is False

        clock.advance(seconds=1)
        assert budget.try_acquire("twelvedata") is True

    def test_denied_call_is_not_counted(self, budget):
        for _ in range(10):
            budget.try_acquire("twelvedata")

        snapshot = budget.snapshot()["twelvedata"]
        assert snapshot.minute_used == 8
        assert snapshot.daily_used == 8


@pytest.mark.unit
class TestDailyLimit:
    """Daily counter keyed by market-timezone date."""

    def test_daily_limit_survives_window_reset(self, budget, clock):
        assert budget.try_acquire("alphavantage")
        assert budget.try_acquire("alphavantage")
        clock.advance(minutes=1)
        assert budget.try_acquire("alphavantage")
        clock.advance(minutes=1)

        assert budget.try_acquire("alphavantage") is False
        assert budget.snapshot()["alphavantage"].exhausted is True

    def test_resets_at_market_midnight_not_utc_midnight(self, budget, clock):
        for minute in range(3):
            clock.now = START.replace(minute=minute)
            budget.try_acquire("alphavantage")

        # 2024-01-06 00:30 UTC is still Jan 5 in New York.
        clock.now = datetime(2024, 1, 6, 0, 30, tzinfo=UTC)
        assert budget.try_acquire("alphavantage") is False

        # 2024-01-06 05:00 UTC is midnight in New York.
        clock.now = datetime(2024, 1, 6, 5, 0, tzinfo=UTC)
        assert budget.try_acquire("alphavantage") is True


@pytest.mark.unit
class TestProvidersAreIndependent:
    """Budgets never share counters."""

    def test_exhausting_one_leaves_other(self, budget):
        budget.try_acquire("alphavantage")
        budget.try_acquire("alphavantage")

        assert budget.try_acquire("alphavantage") is False
        assert budget.try_acquire("twelvedata") is True

    def test_unknown_provider_is_unlimited(self, budget):
        assert all(budget.try_acquire("mock") for _ in range(100))
        assert budget.remaining("mock") == -1
        assert "mock" not in budget.snapshot()


@pytest.mark.unit
class TestRemainingAndReset:
    """remaining(), snapshot() and reset()."""

    def test_remaining_is_smaller_of_both_limits(self, budget):
        assert budget.remaining("alphavantage") == 2
        budget.try_acquire("alphavantage")
        assert budget.remaining("alphavantage") == 1

    def test_snapshot_reports_usage(self, budget):
        budget.try_acquire("twelvedata")

        snapshot = budget.snapshot()["twelvedata"]

        assert snapshot.daily_remaining == 799
        assert snapshot.minute_remaining == 7
        assert snapshot.exhausted is False

    def test_reset_single_provider(self, budget):
        budget.try_acquire("twelvedata")
        budget.try_acquire("alphavantage")

        budget.reset("twelvedata")

        assert budget.snapshot()["twelvedata"].daily_used == 0
        assert budget.snapshot()["alphavantage"].daily_used == 1

    def test_reset_all(self, budget):
        budget.try_acquire("twelvedata")
        budget.try_acquire("alphavantage")

        budget.reset()

        assert all(s.daily_used == 0 for s in budget.snapshot().values())


@pytest.mark.unit
class TestProviderLimits:
    """ProviderLimits validation."""

    @pytest.mark.parametrize("daily,minute", [(0, 5), (5, 0), (-1, 1)])
    def test_rejects_non_positive(self, daily, minute):
        with pytest.raises(ValueError):
            ProviderLimits(daily_limit=daily, per_minute_limit=minute)


@pytest.mark.unit
class TestConcurrentAcquire:
    """Counters never exceed limits under contention."""

    def test_threads_cannot_overspend(self, clock):
        budget = ProviderCallBudget(
            {"twelvedata": ProviderLimits(daily_limit=50, per_minute_limit=50)},
            clock=clock,
        )

        with ThreadPoolExecutor(max_workers=8) as pool:
            granted = list(
                pool.map(lambda _: budget.try_acquire("twelvedata"), range(200))
            )

        assert granted.count(True) == 50
        assert budget.snapshot()["twelvedata"].daily_used == 50

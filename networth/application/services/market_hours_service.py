"""Market hours service.

Answers whether the market is open and how old a cached price may be
before it must be refreshed. All wall-clock rules are evaluated in the
configured market timezone; durations are computed in UTC so DST
transitions never distort them.

Usage:
    from networth.core.container import get_market_hours_service

    market_hours = get_market_hours_service()
    if market_hours.should_refresh(latest.timestamp):
        ...
"""

from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from networth.application.dtos.market_dtos import MarketStatus
from networth.core.config import Settings
from networth.domain.enums import MarketSession

SATURDAY = 5


class MarketHoursService:
    """Market session and cache freshness rules.

    Args:
        open_time: Daily open, local to the market.
        close_time: Daily close, local to the market.
        timezone: IANA zone of the market.
        open_refresh_interval: Max cache age while open.
        closed_refresh_interval: Max cache age while closed.
        weekend_trades: Treat Saturday and Sunday as business days.
    """

    def __init__(
        self,
        *,
        open_time: time,
        close_time: time,
        timezone: str,
        open_refresh_interval: timedelta,
        closed_refresh_interval: timedelta,
        weekend_trades: bool = False,
    ) -> None:
        if open_time >= close_time:
            raise ValueError("market open must be before market close")
        self._open_time = open_time
        self._close_time = close_time
        self._tz = ZoneInfo(timezone)
        self._open_interval = open_refresh_interval
        self._closed_interval = closed_refresh_interval
        self._weekend_trades = weekend_trades

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarketHoursService":
        """Build from application settings."""
        return cls(
            open_time=time.fromisoformat(settings.market_open_local),
            close_time=time.fromisoformat(settings.market_close_local),
            timezone=settings.market_timezone,
            open_refresh_interval=timedelta(minutes=settings.cache_refresh_minutes),
            closed_refresh_interval=timedelta(hours=settings.closed_market_cache_hours),
            weekend_trades=settings.market_weekend_trades,
        )

    def is_business_day(self, day: date) -> bool:
        """True unless the day is a weekend and weekend trading is off."""
        return self._weekend_trades or day.weekday() < SATURDAY

    def is_market_open(self, now: datetime | None = None) -> bool:
        """Whether `now` falls in [open, close) on a business day.

        Args:
            now: Aware instant to evaluate (defaults to the current time).
        """
        local = self._now(now).astimezone(self._tz)
        if not self.is_business_day(local.date()):
            return False
        return self._open_time <= local.time() < self._close_time

    def freshness_threshold(self, now: datetime | None = None) -> timedelta:
        """Max usable cache age at `now`."""
        if self.is_market_open(now):
            return self._open_interval
        return self._closed_interval

    def should_refresh(
        self, last_update: datetime | None, now: datetime | None = None
    ) -> bool:
        """True when there is no cache or it is older than the threshold.

        Args:
            last_update: Timestamp of the newest cache entry, if any.
            now: Aware instant to evaluate.
        """
        if last_update is None:
            return True
        current = self._now(now)
        return current - last_update > self.freshness_threshold(current)

    def seconds_until_next_refresh(
        self, last_update: datetime | None, now: datetime | None = None
    ) -> int:
        """Seconds until the open-market interval allows another refresh.

        Returns 0 while the market is closed or when a refresh is already due.
        """
        current = self._now(now)
        if last_update is None or not self.is_market_open(current):
            return 0
        next_refresh = last_update + self._open_interval
        if current >= next_refresh:
            return 0
        return int((next_refresh - current).total_seconds())

    def get_market_status(self, now: datetime | None = None) -> MarketStatus:
        """Describe the current session and the next open/close."""
        current = self._now(now)
        today = current.astimezone(self._tz).date()
        open_today = self._at(today, self._open_time)
        close_today = self._at(today, self._close_time)

        if not self.is_business_day(today):
            status = MarketSession.CLOSED
            next_day = self._next_business_day(today)
            next_open = self._at(next_day, self._open_time)
            next_close = self._at(next_day, self._close_time)
        elif self.is_market_open(current):
            status = MarketSession.OPEN
            next_close = close_today
            next_open = self._at(self._next_business_day(today), self._open_time)
        elif current < open_today:
            status = MarketSession.PRE_MARKET
            next_open = open_today
            next_close = close_today
        else:
            status = MarketSession.AFTER_HOURS
            next_day = self._next_business_day(today)
            next_open = self._at(next_day, self._open_time)
            next_close = self._at(next_day, self._close_time)

        target = next_close if status is MarketSession.OPEN else next_open
        return MarketStatus(
            is_open=status is MarketSession.OPEN,
            status=status,
            open_time=open_today,
            close_time=close_today,
            next_open=next_open,
            next_close=next_close,
            time_to_next=format_duration(
                target.astimezone(UTC) - current.astimezone(UTC)
            ),
        )

    def _next_business_day(self, day: date) -> date:
        candidate = day + timedelta(days=1)
        while not self.is_business_day(candidate):
            candidate += timedelta(days=1)
        return candidate

    def _at(self, day: date, moment: time) -> datetime:
        return datetime.combine(day, moment, tzinfo=self._tz)

    @staticmethod
    def _now(now: datetime | None) -> datetime:
        return (now or datetime.now(UTC)).astimezone(UTC)


def format_duration(delta: timedelta) -> str:
    """Render a duration as "Xh Ym", or "Ym" under an hour.

    Negative durations render as "0m".
    """
    total_minutes = max(int(delta.total_seconds() // 60), 0)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"

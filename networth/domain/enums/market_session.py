"""Trading session of the market relative to today's hours."""

from enum import Enum


class MarketSession(str, Enum):
    """Market session label reported by market status.

    OPEN: within today's [open, close) window on a business day.
    PRE_MARKET: business day, before today's open.
    AFTER_HOURS: business day, at or after today's close.
    CLOSED: non-business day (weekend when weekend trading is off).
    """

    OPEN = "open"
    PRE_MARKET = "pre_market"
    AFTER_HOURS = "after_hours"
    CLOSED = "closed"

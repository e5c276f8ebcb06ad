"""Market status DTO."""

from dataclasses import dataclass
from datetime import datetime

from networth.domain.enums import MarketSession


@dataclass
class MarketStatus:
    """Market session snapshot.

    Attributes:
        is_open: Whether the market is open now.
        status: open, pre_market, after_hours or closed.
        open_time: Today's open, in the market timezone.
        close_time: Today's close, in the market timezone.
        next_open: Next opening instant.
        next_close: Next closing instant.
        time_to_next: Time to the next open (or close while open), "2h 5m" / "45m".
    """

    is_open: bool
    status: MarketSession
    open_time: datetime
    close_time: datetime
    next_open: datetime
    next_close: datetime
    time_to_next: str

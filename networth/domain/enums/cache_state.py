"""Cache state observed when a price refresh is decided."""

from enum import Enum


class CacheState(str, Enum):
    """State of the cached price for a symbol at decision time.

    FRESH: newest entry is within the freshness threshold.
    STALE: an entry exists but is older than the threshold.
    NONE: no entry exists for the symbol.
    """

    FRESH = "fresh"
    STALE = "stale"
    NONE = "none"

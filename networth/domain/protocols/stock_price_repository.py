"""StockPriceRepository protocol for the price cache.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from datetime import datetime
from typing import Protocol

from networth.domain.entities.stock_price import StockPrice


class StockPriceRepository(Protocol):
    """Stock price cache repository protocol (port).

    The cache is append-only: entries are inserted, never updated.

    Methods:
        find_latest: Most recent entry for a symbol
        add: Append an entry
        find_latest_update: Most recent timestamp across all symbols
        list_symbols: Every symbol with at least one entry
        count_stale_symbols: Symbols whose latest entry predates a cutoff
    """

    async def find_latest(self, symbol: str) -> StockPrice | None:
        """Find the most recent entry for a symbol.

        Args:
            symbol: Normalized ticker symbol.

        Returns:
            Latest StockPrice by timestamp, or None if never cached.
        """
        ...

    async def add(self, price: StockPrice) -> StockPrice | None:
        """Append a cache entry.

        Args:
            price: Entry to insert (id is ignored).

        Returns:
            The persisted entry with its id, or None if the write failed
            (duplicate (symbol, timestamp) or database error).
        """
        ...

    async def find_latest_update(self) -> datetime | None:
        """Most recent cache timestamp across all symbols.

        Returns:
            Latest timestamp, or None if the cache is empty.
        """
        ...

    async def list_symbols(self) -> list[str]:
        """All cached symbols in alphabetical order."""
        ...

    async def count_stale_symbols(self, older_than: datetime) -> int:
        """Count symbols whose newest entry is older than a cutoff.

        Args:
            older_than: Cutoff timestamp.

        Returns:
            Number of stale symbols.
        """
        ...

"""Stock price cache database model.

Append-only: one row per fetch. The current price of a symbol is its row
with the greatest timestamp.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from networth.infrastructure.persistence.base import BaseModel


class StockPriceModel(BaseModel):
    """Cached stock price.

    Fields:
        id: Integer primary key (from BaseModel)
        created_at: Insert time (from BaseModel)
        symbol: Upper-case ticker symbol
        price: Price, NUMERIC(12, 4)
        timestamp: When the price was fetched and cached
        source: twelvedata, alphavantage or mock

    Constraints:
        - uq_stock_prices_symbol_timestamp: (symbol, timestamp)
        - ix_stock_prices_symbol: (symbol) for latest-price lookups
    """

    __tablename__ = "stock_prices"

    symbol: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        index=True,
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 4),
        nullable=False,
    )

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    source: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("symbol", "timestamp", name="uq_stock_prices_symbol_timestamp"),
    )

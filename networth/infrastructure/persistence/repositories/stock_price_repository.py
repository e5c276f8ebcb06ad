"""StockPriceRepository - SQLAlchemy implementation.

Adapter for hexagonal architecture.
Maps between domain StockPrice entities and database StockPriceModel.
"""

from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from networth.domain.entities.stock_price import StockPrice
from networth.domain.enums.price_source import PriceSource
from networth.infrastructure.persistence.models.stock_price import StockPriceModel


class StockPriceRepository:
    """SQLAlchemy implementation of StockPriceRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = StockPriceRepository(session)
        ...     latest = await repo.find_latest("AAPL")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_latest(self, symbol: str) -> StockPrice | None:
        """Find the most recent entry for a symbol.

        Args:
            symbol: Normalized ticker symbol.

        Returns:
            Latest StockPrice by timestamp, or None if never cached.
        """
        stmt = (
            select(StockPriceModel)
            .where(StockPriceModel.symbol == symbol)
            .order_by(StockPriceModel.timestamp.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_domain(model)

    async def add(self, price: StockPrice) -> StockPrice | None:
        """Append a cache entry.

        Args:
            price: Entry to insert.

        Returns:
            Persisted entry with its id, or None if the write failed.
        """
        model = self._to_model(price)
        self.session.add(model)
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            return None

        return self._to_domain(model)

    async def find_latest_update(self) -> datetime | None:
        """Most recent cache timestamp across all symbols."""
        result = await self.session.execute(select(func.max(StockPriceModel.timestamp)))
        latest = result.scalar_one_or_none()
        return _as_utc(latest) if latest is not None else None

    async def list_symbols(self) -> list[str]:
        """All cached symbols in alphabetical order."""
        stmt = (
            select(StockPriceModel.symbol)
            .distinct()
            .order_by(StockPriceModel.symbol)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_stale_symbols(self, older_than: datetime) -> int:
        """Count symbols whose newest entry is older than a cutoff.

        Args:
            older_than: Cutoff timestamp.

        Returns:
            Number of stale symbols.
        """
        latest = (
            select(
                StockPriceModel.symbol,
                func.max(StockPriceModel.timestamp).label("latest"),
            )
            .group_by(StockPriceModel.symbol)
            .subquery()
        )
        stmt = select(func.count()).select_from(latest).where(latest.c.latest < older_than)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    def _to_domain(self, model: StockPriceModel) -> StockPrice:
        """Convert database model to domain entity."""
        return StockPrice(
            id=model.id,
            symbol=model.symbol,
            price=model.price,
            timestamp=_as_utc(model.timestamp),
            source=PriceSource(model.source),
        )

    def _to_model(self, entity: StockPrice) -> StockPriceModel:
        """Convert domain entity to database model."""
        return StockPriceModel(
            symbol=entity.symbol,
            price=entity.price,
            timestamp=entity.timestamp,
            source=entity.source.value,
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)

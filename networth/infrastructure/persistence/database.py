"""Async engine and session factory.

One Database per process (see networth.core.container.get_database).
Callers open a session per unit of work and hand it to repositories:

    async with database.get_session() as session:
        service = build_price_refresh_service(session)
        await service.refresh_symbol("AAPL")

Repositories commit their own writes; get_session commits whatever is
left on a clean exit and rolls back when the block raises.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


class Database:
    """Owns the AsyncEngine.

    Args:
        database_url: SQLAlchemy async URL. PostgreSQL (asyncpg) in
            deployments, sqlite+aiosqlite in tests.
        echo: Log every SQL statement.
        pool_size: Pooled connections kept open (PostgreSQL only).
        max_overflow: Extra connections allowed past pool_size.
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 0,
    ) -> None:
        options: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        if database_url.startswith("postgresql"):
            options["pool_size"] = pool_size
            options["max_overflow"] = max_overflow
            options["connect_args"] = {
                "server_settings": {"jit": "off"},
                "command_timeout": 60,
                "timeout": 30,
            }

        self.engine: AsyncEngine = create_async_engine(database_url, **options)
        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session scoped to the ``async with`` block."""
        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create the credentials and stock_prices tables.

        Development and test databases only; there is no migration tooling.
        """
        from networth.infrastructure.persistence.base import BaseModel
        from networth.infrastructure.persistence.models import (  # noqa: F401
            CredentialModel,
            StockPriceModel,
        )

        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def drop_all(self) -> None:
        from networth.infrastructure.persistence.base import BaseModel

        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.drop_all)

    async def close(self) -> None:
        await self.engine.dispose()

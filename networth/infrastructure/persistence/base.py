"""Declarative bases for the networth tables.

Two flavours of row exist:

    BaseModel (id, created_at)
        ├── BaseMutableModel (+ updated_at)
        │   └── CredentialModel       rows are re-encrypted and deactivated
        └── StockPriceModel           append-only cache entries

Models stay in the infrastructure layer. Repositories translate them into
domain entities, which never import SQLAlchemy.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class BaseModel(DeclarativeBase):
    """Root of every table: integer surrogate key and insert timestamp."""

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # UTC; filled by the database when the row is inserted.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"


class BaseMutableModel(BaseModel):
    """Table whose rows change after insert.

    updated_at is refreshed by SQLAlchemy on every UPDATE unless the
    repository sets it explicitly.
    """

    __abstract__ = True

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

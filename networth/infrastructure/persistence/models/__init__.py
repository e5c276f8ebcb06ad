"""Database models.

Importing this package registers every table on BaseModel.metadata.
"""

from networth.infrastructure.persistence.models.credential import CredentialModel
from networth.infrastructure.persistence.models.stock_price import StockPriceModel

__all__ = ["CredentialModel", "StockPriceModel"]

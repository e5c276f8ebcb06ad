"""Domain entities.

Usage:
    from networth.domain.entities import Credential, StockPrice
"""

from networth.domain.entities.credential import Credential
from networth.domain.entities.stock_price import StockPrice

__all__ = ["Credential", "StockPrice"]

"""Domain protocols (ports).

Usage:
    from networth.domain.protocols import CredentialRepository, PriceProviderProtocol
"""

from networth.domain.protocols.encryption_protocol import (
    DecryptionError,
    EncryptionError,
    EncryptionKeyError,
    EncryptionProtocol,
    SerializationError,
)
from networth.domain.protocols.call_budget_protocol import CallBudgetProtocol
from networth.domain.protocols.credential_repository import CredentialRepository
from networth.domain.protocols.logger_protocol import LoggerProtocol
from networth.domain.protocols.price_provider_protocol import PriceProviderProtocol
from networth.domain.protocols.stock_price_repository import StockPriceRepository

__all__ = [
    # Encryption
    "EncryptionProtocol",
    "EncryptionError",
    "EncryptionKeyError",
    "DecryptionError",
    "SerializationError",
    # Repositories
    "CredentialRepository",
    "StockPriceRepository",
    # Services
    "CallBudgetProtocol",
    "LoggerProtocol",
    "PriceProviderProtocol",
]

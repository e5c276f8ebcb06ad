"""Domain errors package.

Usage:
    from networth.domain.errors import ProviderError, ProviderRateLimitError
    from networth.domain.errors import PriceDataUnavailableError
"""

from networth.domain.errors.credential_error import (
    CredentialStoreError,
    CredentialTypeError,
)
from networth.domain.errors.price_error import PriceDataUnavailableError, PriceError
from networth.domain.errors.provider_error import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)

__all__ = [
    "CredentialStoreError",
    "CredentialTypeError",
    "PriceError",
    "PriceDataUnavailableError",
    # Provider API errors
    "ProviderError",
    "ProviderAuthenticationError",
    "ProviderUnavailableError",
    "ProviderRateLimitError",
    "ProviderInvalidResponseError",
]

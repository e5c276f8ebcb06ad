"""Domain value objects.

Usage:
    from networth.domain.value_objects import APIKeyCredential, PriceQuote
"""

from networth.domain.value_objects.call_budget import BudgetSnapshot, ProviderLimits
from networth.domain.value_objects.credential_data import (
    APIKeyCredential,
    BasicAuthCredential,
    CredentialData,
    OAuthCredential,
    decode_credential_data,
    encode_credential_data,
    validate_credential_data,
)
from networth.domain.value_objects.price_quote import PriceQuote

__all__ = [
    "APIKeyCredential",
    "BasicAuthCredential",
    "BudgetSnapshot",
    "CredentialData",
    "OAuthCredential",
    "PriceQuote",
    "ProviderLimits",
    "decode_credential_data",
    "encode_credential_data",
    "validate_credential_data",
]

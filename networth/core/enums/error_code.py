"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention and travel inside
DomainError values so the HTTP layer can map them to status codes.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Credential errors (CREDENTIAL_*)
- Encryption errors (ENCRYPTION_*, DECRYPTION_*)
- Provider errors (PROVIDER_*)
- Price cache errors (PRICE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_INPUT = "invalid_input"
    INVALID_SYMBOL = "invalid_symbol"

    # Credential errors
    CREDENTIAL_NOT_FOUND = "credential_not_found"
    CREDENTIAL_ALREADY_EXISTS = "credential_already_exists"
    CREDENTIAL_TYPE_UNSUPPORTED = "credential_type_unsupported"
    CREDENTIAL_STORE_FAILED = "credential_store_failed"

    # Encryption errors
    ENCRYPTION_KEY_INVALID = "encryption_key_invalid"
    ENCRYPTION_FAILED = "encryption_failed"
    DECRYPTION_FAILED = "decryption_failed"

    # Provider errors
    PROVIDER_AUTHENTICATION_FAILED = "provider_authentication_failed"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_RATE_LIMITED = "provider_rate_limited"
    PROVIDER_INVALID_RESPONSE = "provider_invalid_response"

    # Price cache errors
    PRICE_DATA_UNAVAILABLE = "price_data_unavailable"
    PRICE_CACHE_WRITE_FAILED = "price_cache_write_failed"
    PRICE_CACHE_READ_FAILED = "price_cache_read_failed"

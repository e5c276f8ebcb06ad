"""Centralized constants for internal implementation details.

These are fixed implementation details, NOT environment-specific
configuration. Environment-driven values live in `networth.core.config`.

Categories:
- Cryptography: key and nonce sizes
- Timeouts: default timeouts for external calls
- Limits: truncation and window sizes
"""

# =============================================================================
# Cryptography
# =============================================================================

AES_KEY_LENGTH: int = 32
"""AES-256 encryption key length in bytes."""

GCM_NONCE_LENGTH: int = 12
"""AES-GCM nonce length in bytes (96 bits, NIST recommended)."""

GCM_TAG_LENGTH: int = 16
"""AES-GCM authentication tag length in bytes."""


# =============================================================================
# Timeouts
# =============================================================================

PROVIDER_TIMEOUT_DEFAULT: float = 30.0
"""Default timeout for external price provider calls in seconds."""


# =============================================================================
# Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum provider response body length kept in error details."""

RATE_WINDOW_SECONDS: int = 60
"""Length of the per-minute provider call window."""

MAX_SYMBOL_LENGTH: int = 10
"""Maximum ticker symbol length (matches the stock_prices column)."""

"""Price provider error types.

These errors are part of the PriceProviderProtocol contract: they are the
failure cases a provider client can return. The refresh service treats
every one of them as "provider unavailable for this cycle" and moves on to
the next provider; none of them reach the caller raw.

Usage:
    from networth.domain.errors import ProviderError, ProviderRateLimitError

    async def fetch_price(
        self, symbol: str, *, intraday: bool = False
    ) -> Result[PriceQuote, ProviderError]:
        if quota_exceeded:
            return Failure(error=ProviderRateLimitError(...))
        return Success(value=quote)
"""

from dataclasses import dataclass

from networth.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderError(DomainError):
    """Base price provider error.

    Attributes:
        provider_name: Provider that failed (twelvedata, alphavantage).
    """

    provider_name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderAuthenticationError(ProviderError):
    """Provider rejected the configured API key (401/403)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderUnavailableError(ProviderError):
    """Provider could not be reached.

    Raised for timeouts, connection failures and 5xx responses.

    Attributes:
        is_transient: Whether the error is likely transient.
    """

    is_transient: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderRateLimitError(ProviderError):
    """Provider rate limit exceeded.

    Returned when a provider answers 429 or a quota message, and by the
    refresh service when every provider's local call budget is exhausted.

    Attributes:
        retry_after: Seconds to wait before retrying, when known.
    """

    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderInvalidResponseError(ProviderError):
    """Provider returned a malformed or unexpected payload.

    Attributes:
        response_body: Truncated raw response body for debugging.
    """

    response_body: str | None = None

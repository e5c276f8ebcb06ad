"""Shared HTTP plumbing for quote providers.

Twelve Data and Alpha Vantage both answer a single GET with a JSON object,
so the transport concerns live here: one request per quote, HTTP status
triage into ProviderError values, and decoding of the body into a dict.
Concrete clients only assemble query parameters and read the quote fields
out of the decoded body.

Every outcome is a Result. Transport failures (timeouts, refused
connections, 5xx) are transient ProviderUnavailableError values so the
refresh service can move on to the next provider.

API keys are sent as query parameters. Neither the URL nor the params are
ever passed to the logger.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

import httpx
import structlog

from networth.core.constants import PROVIDER_TIMEOUT_DEFAULT, RESPONSE_BODY_MAX_LENGTH
from networth.core.enums import ErrorCode
from networth.core.result import Failure, Result, Success
from networth.domain.errors import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)


class BaseProviderAPIClient:
    """Quote provider client base.

    The logger is named after the provider ("twelvedata_api",
    "alphavantage_api") and every event name carries the same prefix.

    Example:
        >>> class TwelveDataClient(BaseProviderAPIClient):
        ...     async def fetch_price(self, symbol: str, *, intraday: bool = False):
        ...         return await self._execute_and_parse_object(
        ...             path="/quote",
        ...             params={"symbol": symbol, "apikey": self._api_key},
        ...             operation="fetch_price",
        ...         )
    """

    def __init__(
        self,
        *,
        base_url: str,
        provider_name: str,
        display_name: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        """
        Args:
            base_url: Root of the provider API; a trailing slash is dropped.
            provider_name: PriceSource value, used in log events and errors.
            display_name: Name shown in error messages ("Twelve Data").
            timeout: Per-request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._provider_name = provider_name
        self._display_name = display_name
        self._timeout = timeout
        self._logger = structlog.get_logger(f"{provider_name}_api")

    async def _execute_request(
        self,
        *,
        path: str,
        params: dict[str, str],
        operation: str,
    ) -> Result[httpx.Response, ProviderError]:
        """Send one GET to base_url + path.

        Any HTTP status counts as a response here; status triage happens in
        _check_error_response. Only transport errors fail, as transient
        ProviderUnavailableError values.
        """
        url = f"{self._base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=params)
            return Success(value=response)

        except httpx.TimeoutException:
            self._logger.warning(
                f"{self._provider_name}_api_timeout",
                operation=operation,
                timeout=self._timeout,
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{self._display_name} API request timed out",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

        except httpx.RequestError as e:
            self._logger.warning(
                f"{self._provider_name}_api_connection_error",
                operation=operation,
                error_type=type(e).__name__,
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"Failed to connect to {self._display_name} API",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Failure[ProviderError] | None:
        """Map a non-200 status to a ProviderError, or None for 200.

        429 is a rate limit (with Retry-After when sent), 401/403 an
        authentication failure, 5xx a transient outage. 404 and anything
        else unexpected is an invalid response.
        """
        status = response.status_code

        if status == 200:
            return None

        if status == 429:
            return self._rate_limited(
                operation, retry_after=_parse_retry_after(response.headers)
            )

        if status in (401, 403):
            return self._auth_failed(operation, status_code=status)

        if status == 404:
            self._logger.warning(
                f"{self._provider_name}_api_not_found",
                operation=operation,
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"{self._display_name} resource not found",
                    provider_name=self._provider_name,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        if status >= 500:
            self._logger.warning(
                f"{self._provider_name}_api_server_error",
                operation=operation,
                status_code=status,
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{self._display_name} API server error: {status}",
                    provider_name=self._provider_name,
                    is_transient=True,
                )
            )

        self._logger.warning(
            f"{self._provider_name}_api_unexpected_status",
            operation=operation,
            status_code=status,
        )
        return Failure(
            error=ProviderInvalidResponseError(
                code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                message=f"Unexpected response from {self._display_name}: {status}",
                provider_name=self._provider_name,
                response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
            )
        )

    def _parse_json_object(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Decode a 200 response body that must be a JSON object."""
        if (failure := self._check_error_response(response, operation)) is not None:
            return failure

        try:
            data = response.json()
        except ValueError:
            self._logger.error(
                f"{self._provider_name}_api_invalid_json",
                operation=operation,
            )
            return self._invalid_response(
                f"Invalid JSON response from {self._display_name}", response.text
            )

        if not isinstance(data, dict):
            self._logger.warning(
                f"{self._provider_name}_api_unexpected_format",
                operation=operation,
                data_type=type(data).__name__,
            )
            return self._invalid_response(
                f"Expected object response from {self._display_name}", response.text
            )

        return Success(value=data)

    async def _execute_and_parse_object(
        self,
        *,
        path: str,
        params: dict[str, str],
        operation: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """GET and decode; the usual entry point for subclasses."""
        match await self._execute_request(path=path, params=params, operation=operation):
            case Failure() as failure:
                return failure
            case Success(value=response):
                return self._parse_json_object(response, operation)

    def _rate_limited(
        self, operation: str, *, retry_after: int | None = None
    ) -> Failure[ProviderError]:
        self._logger.warning(
            f"{self._provider_name}_api_rate_limited",
            operation=operation,
            retry_after=retry_after,
        )
        return Failure(
            error=ProviderRateLimitError(
                code=ErrorCode.PROVIDER_RATE_LIMITED,
                message=f"{self._display_name} API rate limit exceeded",
                provider_name=self._provider_name,
                retry_after=retry_after,
            )
        )

    def _auth_failed(self, operation: str, *, status_code: int) -> Failure[ProviderError]:
        self._logger.warning(
            f"{self._provider_name}_api_auth_failed",
            operation=operation,
            status_code=status_code,
        )
        return Failure(
            error=ProviderAuthenticationError(
                code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                message=f"{self._display_name} rejected the configured API key",
                provider_name=self._provider_name,
            )
        )

    def _invalid_response(self, message: str, body: Any) -> Failure[ProviderError]:
        return Failure(
            error=ProviderInvalidResponseError(
                code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                message=message,
                provider_name=self._provider_name,
                response_body=str(body)[:RESPONSE_BODY_MAX_LENGTH],
            )
        )


def parse_price(raw: Any) -> Decimal | None:
    """Parse a provider price field into a positive Decimal.

    Args:
        raw: String or number from the provider payload.

    Returns:
        Decimal if the value is a finite positive number, None otherwise.
    """
    if raw is None or isinstance(raw, bool):
        return None
    try:
        price = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    if not price.is_finite() or price <= 0:
        return None
    return price


def _parse_retry_after(headers: httpx.Headers) -> int | None:
    retry_after = headers.get("Retry-After")
    if retry_after is None or not retry_after.strip().isdigit():
        return None
    return int(retry_after)

"""Twelve Data price client.

Primary price provider. Free tier: 800 calls/day, 8 calls/minute.

Endpoint:
    GET /quote?symbol=AAPL&apikey=...

Quote Response Structure:
    {
        "symbol": "AAPL",
        "datetime": "2024-01-05",
        "timestamp": 1704466800,
        "close": "201.45",
        ...
    }

Error Response Structure (HTTP 200 with an error body):
    {"code": 429, "message": "You have run out of API credits...", "status": "error"}

Reference:
    - https://twelvedata.com/docs#quote
"""

from datetime import UTC, datetime
from typing import Any
from zoneinfo import ZoneInfo

from networth.core.constants import PROVIDER_TIMEOUT_DEFAULT
from networth.core.enums import ErrorCode
from networth.core.result import Failure, Result, Success
from networth.domain.enums.price_source import PriceSource
from networth.domain.errors import ProviderError, ProviderInvalidResponseError
from networth.domain.value_objects.price_quote import PriceQuote
from networth.infrastructure.providers.base_api_client import (
    BaseProviderAPIClient,
    parse_price,
)


class TwelveDataClient(BaseProviderAPIClient):
    """Twelve Data implementation of PriceProviderProtocol.

    Example:
        >>> client = TwelveDataClient(api_key="...", base_url="https://api.twelvedata.com")
        >>> match await client.fetch_price("AAPL"):
        ...     case Success(value=quote):
        ...         print(quote.price)
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.twelvedata.com",
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
        exchange_timezone: str = "America/New_York",
    ) -> None:
        """Initialize Twelve Data client.

        Args:
            api_key: Twelve Data API key.
            base_url: API base URL.
            timeout: HTTP request timeout in seconds.
            exchange_timezone: Zone used for naive `datetime` fields.
        """
        super().__init__(
            base_url=base_url,
            provider_name=PriceSource.TWELVE_DATA.value,
            display_name=PriceSource.TWELVE_DATA.display_name,
            timeout=timeout,
        )
        self._api_key = api_key
        self._exchange_tz = ZoneInfo(exchange_timezone)

    @property
    def name(self) -> str:
        return self._provider_name

    @property
    def source(self) -> PriceSource:
        return PriceSource.TWELVE_DATA

    async def fetch_price(
        self, symbol: str, *, intraday: bool = False
    ) -> Result[PriceQuote, ProviderError]:
        """Fetch the latest quote for a symbol.

        Args:
            symbol: Normalized ticker symbol.
            intraday: Ignored; the quote endpoint is already live.

        Returns:
            Success(PriceQuote) with the close price.
            Failure(ProviderRateLimitError): Credits exhausted (code 429).
            Failure(ProviderAuthenticationError): Bad API key (code 401/403).
            Failure(ProviderInvalidResponseError): Unknown symbol or bad payload.
            Failure(ProviderUnavailableError): Network failure or 5xx.
        """
        operation = "fetch_price"
        result = await self._execute_and_parse_object(
            path="/quote",
            params={"symbol": symbol, "apikey": self._api_key},
            operation=operation,
        )
        if isinstance(result, Failure):
            return result

        data = result.value

        if data.get("status") == "error":
            return self._map_error_body(data, symbol, operation)

        price = parse_price(data.get("close", data.get("price")))
        if price is None:
            self._logger.warning(
                "twelvedata_api_missing_price",
                operation=operation,
                symbol=symbol,
            )
            return self._invalid_response(
                f"Twelve Data returned no usable price for {symbol}", data
            )

        quote = PriceQuote(
            symbol=symbol,
            price=price,
            source=PriceSource.TWELVE_DATA,
            observed_at=self._parse_observed_at(data),
        )
        self._logger.debug(
            "twelvedata_api_succeeded",
            operation=operation,
            symbol=symbol,
        )
        return Success(value=quote)

    def _map_error_body(
        self, data: dict[str, Any], symbol: str, operation: str
    ) -> Failure[ProviderError]:
        code = data.get("code")
        if code == 429:
            return self._rate_limited(operation)
        if code in (401, 403):
            return self._auth_failed(operation, status_code=code)

        self._logger.warning(
            "twelvedata_api_error_body",
            operation=operation,
            symbol=symbol,
            error_code=code,
        )
        return Failure(
            error=ProviderInvalidResponseError(
                code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                message=(
                    f"Twelve Data error for {symbol}: "
                    f"{data.get('message', 'unknown error')}"
                ),
                provider_name=self._provider_name,
                details={"provider_code": code},
            )
        )

    def _parse_observed_at(self, data: dict[str, Any]) -> datetime | None:
        timestamp = data.get("timestamp")
        if isinstance(timestamp, int | float) and not isinstance(timestamp, bool):
            return datetime.fromtimestamp(timestamp, UTC)

        raw = data.get("datetime")
        if not isinstance(raw, str) or not raw:
            return None
        try:
            observed = datetime.fromisoformat(raw)
        except ValueError:
            return None
        if observed.tzinfo is None:
            observed = observed.replace(tzinfo=self._exchange_tz)
        return observed.astimezone(UTC)

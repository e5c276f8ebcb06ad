"""Alpha Vantage price client.

Fallback price provider. Free tier: 25 calls/day, 5 calls/minute.

Endpoints:
    GET /query?function=TIME_SERIES_INTRADAY&symbol=AAPL&interval=1min&apikey=...
    GET /query?function=GLOBAL_QUOTE&symbol=AAPL&apikey=...

GLOBAL_QUOTE reports the last close, so while the market is open (or on a
forced refresh) the 1-minute intraday series is tried first and the close
of its newest bar is used. GLOBAL_QUOTE is the fallback when the series is
empty or unusable.

Intraday Response Structure:
    {
        "Meta Data": {...},
        "Time Series (1min)": {
            "2024-01-05 15:59:00": {"4. close": "201.4500", ...},
            ...
        }
    }

Quote Response Structure:
    {
        "Global Quote": {
            "01. symbol": "AAPL",
            "05. price": "201.4500",
            "07. latest trading day": "2024-01-05",
            ...
        }
    }

Throttled and error responses still arrive with HTTP 200:
    {"Note": "Thank you for using Alpha Vantage! Our standard API call frequency..."}
    {"Information": "...rate limit is 25 requests per day..."}
    {"Error Message": "Invalid API call..."}

Reference:
    - https://www.alphavantage.co/documentation/#intraday
    - https://www.alphavantage.co/documentation/#latestprice
"""

from datetime import UTC, date, datetime, time
from typing import Any
from zoneinfo import ZoneInfo

from networth.core.constants import PROVIDER_TIMEOUT_DEFAULT
from networth.core.enums import ErrorCode
from networth.core.result import Failure, Result, Success
from networth.domain.enums.price_source import PriceSource
from networth.domain.errors import ProviderError, ProviderRateLimitError
from networth.domain.protocols import CallBudgetProtocol
from networth.domain.value_objects.price_quote import PriceQuote
from networth.infrastructure.providers.base_api_client import (
    BaseProviderAPIClient,
    parse_price,
)

GLOBAL_QUOTE_KEY = "Global Quote"
PRICE_KEY = "05. price"
TRADING_DAY_KEY = "07. latest trading day"

INTRADAY_INTERVAL = "1min"
INTRADAY_SERIES_KEY = f"Time Series ({INTRADAY_INTERVAL})"
INTRADAY_CLOSE_KEY = "4. close"
INTRADAY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class AlphaVantageClient(BaseProviderAPIClient):
    """Alpha Vantage implementation of PriceProviderProtocol.

    An intraday fetch can cost two HTTP calls. The caller pays for the
    first one; the GLOBAL_QUOTE fallback is charged to ``call_budget``
    when one is given, and skipped if the budget refuses it.

    Example:
        >>> client = AlphaVantageClient(api_key="...")
        >>> result = await client.fetch_price("MSFT", intraday=True)
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://www.alphavantage.co/query",
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
        exchange_timezone: str = "America/New_York",
        call_budget: CallBudgetProtocol | None = None,
    ) -> None:
        """Initialize Alpha Vantage client.

        Args:
            api_key: Alpha Vantage API key.
            base_url: Query endpoint URL.
            timeout: HTTP request timeout in seconds.
            exchange_timezone: Zone of the reported trading day and bar times.
            call_budget: Allowance charged for the second call of an
                intraday fetch. None means the second call is never limited.
        """
        super().__init__(
            base_url=base_url,
            provider_name=PriceSource.ALPHA_VANTAGE.value,
            display_name=PriceSource.ALPHA_VANTAGE.display_name,
            timeout=timeout,
        )
        self._api_key = api_key
        self._exchange_tz = ZoneInfo(exchange_timezone)
        self._call_budget = call_budget

    @property
    def name(self) -> str:
        return self._provider_name

    @property
    def source(self) -> PriceSource:
        return PriceSource.ALPHA_VANTAGE

    async def fetch_price(
        self, symbol: str, *, intraday: bool = False
    ) -> Result[PriceQuote, ProviderError]:
        """Fetch the current price for a symbol.

        Args:
            symbol: Normalized ticker symbol.
            intraday: Try the 1-minute series before GLOBAL_QUOTE.

        Returns:
            Success(PriceQuote) with the latest price.
            Failure(ProviderRateLimitError): Note/Information throttle body,
                or no budget left for the GLOBAL_QUOTE fallback.
            Failure(ProviderInvalidResponseError): Error Message body, empty
                quote (unknown symbol) or unusable price.
            Failure(ProviderUnavailableError): Network failure or 5xx.
        """
        if not intraday:
            return await self._fetch_global_quote(symbol)

        match await self._fetch_intraday(symbol):
            case Success() as success:
                return success
            case Failure(error=ProviderRateLimitError()) as failure:
                return failure
            case Failure(error=error):
                self._logger.info(
                    "alphavantage_api_intraday_unusable",
                    symbol=symbol,
                    error_code=error.code.value,
                )

        if self._call_budget is not None and not self._call_budget.try_acquire(
            self._provider_name
        ):
            self._logger.warning(
                "alphavantage_api_budget_exhausted",
                operation="fetch_price",
                symbol=symbol,
            )
            return Failure(
                error=ProviderRateLimitError(
                    code=ErrorCode.PROVIDER_RATE_LIMITED,
                    message=f"{self._display_name} call budget exhausted",
                    provider_name=self._provider_name,
                )
            )

        return await self._fetch_global_quote(symbol)

    async def _fetch_intraday(self, symbol: str) -> Result[PriceQuote, ProviderError]:
        operation = "fetch_intraday"
        result = await self._execute_and_parse_object(
            path="",
            params={
                "function": "TIME_SERIES_INTRADAY",
                "symbol": symbol,
                "interval": INTRADAY_INTERVAL,
                "apikey": self._api_key,
            },
            operation=operation,
        )
        if isinstance(result, Failure):
            return result

        data = result.value
        if (failure := self._check_error_body(data, operation, symbol)) is not None:
            return failure

        series = data.get(INTRADAY_SERIES_KEY)
        if not isinstance(series, dict) or not series:
            return self._invalid_response(
                f"Alpha Vantage returned no intraday data for {symbol}", data
            )

        # Keys sort chronologically; walk back to the newest usable bar.
        for stamp in sorted(series, reverse=True):
            bar = series[stamp]
            if not isinstance(bar, dict):
                continue
            price = parse_price(bar.get(INTRADAY_CLOSE_KEY))
            if price is None:
                continue
            quote = PriceQuote(
                symbol=symbol,
                price=price,
                source=PriceSource.ALPHA_VANTAGE,
                observed_at=self._parse_bar_time(stamp),
            )
            self._logger.debug(
                "alphavantage_api_succeeded",
                operation=operation,
                symbol=symbol,
            )
            return Success(value=quote)

        return self._invalid_response(
            f"Alpha Vantage returned no usable intraday price for {symbol}", data
        )

    async def _fetch_global_quote(self, symbol: str) -> Result[PriceQuote, ProviderError]:
        operation = "fetch_price"
        result = await self._execute_and_parse_object(
            path="",
            params={"function": "GLOBAL_QUOTE", "symbol": symbol, "apikey": self._api_key},
            operation=operation,
        )
        if isinstance(result, Failure):
            return result

        data = result.value
        if (failure := self._check_error_body(data, operation, symbol)) is not None:
            return failure

        quote_data = data.get(GLOBAL_QUOTE_KEY)
        if not isinstance(quote_data, dict) or not quote_data:
            self._logger.warning(
                "alphavantage_api_empty_quote",
                operation=operation,
                symbol=symbol,
            )
            return self._invalid_response(
                f"Alpha Vantage returned no quote for {symbol}", data
            )

        price = parse_price(quote_data.get(PRICE_KEY))
        if price is None:
            return self._invalid_response(
                f"Alpha Vantage returned no usable price for {symbol}", data
            )

        quote = PriceQuote(
            symbol=symbol,
            price=price,
            source=PriceSource.ALPHA_VANTAGE,
            observed_at=self._parse_trading_day(quote_data),
        )
        self._logger.debug(
            "alphavantage_api_succeeded",
            operation=operation,
            symbol=symbol,
        )
        return Success(value=quote)

    def _check_error_body(
        self, data: dict[str, Any], operation: str, symbol: str
    ) -> Failure[ProviderError] | None:
        """Map a 200 body carrying Note/Information/Error Message to a failure."""
        if "Note" in data or "Information" in data:
            return self._rate_limited(operation)

        if "Error Message" in data:
            self._logger.warning(
                "alphavantage_api_error_message",
                operation=operation,
                symbol=symbol,
            )
            return self._invalid_response(
                f"Alpha Vantage error for {symbol}: {data['Error Message']}", data
            )

        return None

    def _parse_bar_time(self, stamp: str) -> datetime | None:
        try:
            local = datetime.strptime(stamp, INTRADAY_TIMESTAMP_FORMAT)
        except ValueError:
            return None
        return local.replace(tzinfo=self._exchange_tz).astimezone(UTC)

    def _parse_trading_day(self, quote_data: dict[str, Any]) -> datetime | None:
        raw = quote_data.get(TRADING_DAY_KEY)
        if not isinstance(raw, str):
            return None
        try:
            trading_day = date.fromisoformat(raw)
        except ValueError:
            return None
        midnight = datetime.combine(trading_day, time.min, tzinfo=self._exchange_tz)
        return midnight.astimezone(UTC)

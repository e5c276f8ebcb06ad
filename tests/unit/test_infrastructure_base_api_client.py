"""Tests for networth/infrastructure/providers/base_api_client.py.

Verifies the BaseProviderAPIClient maps HTTP statuses, transport failures
and JSON payloads to provider errors for all price clients.
"""

from decimal import Decimal
from unittest.mock import MagicMock

import httpx
import pytest

from networth.core.constants import PROVIDER_TIMEOUT_DEFAULT
from networth.core.enums import ErrorCode
from networth.core.result import Failure, Success
from networth.domain.errors import (
    ProviderAuthenticationError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)
from networth.infrastructure.providers.base_api_client import (
    BaseProviderAPIClient,
    parse_price,
)


class ConcreteAPIClient(BaseProviderAPIClient):
    """Concrete implementation for testing."""

    def __init__(self, *, base_url: str, timeout: float = PROVIDER_TIMEOUT_DEFAULT):
        super().__init__(
            base_url=base_url,
            provider_name="test_provider",
            display_name="Test Provider",
            timeout=timeout,
        )


def make_response(status: int, *, text: str = "", headers: dict | None = None):
    response = MagicMock(spec=httpx.Response)
    response.status_code = status
    response.text = text
    response.headers = httpx.Headers(headers or {})
    return response


@pytest.fixture
def client() -> ConcreteAPIClient:
    return ConcreteAPIClient(base_url="https://api.test.com/")


@pytest.mark.unit
class TestBaseProviderAPIClientInit:
    """Tests for BaseProviderAPIClient initialization."""

    def test_strips_trailing_slash_from_base_url(self, client) -> None:
        assert client._base_url == "https://api.test.com"

    def test_uses_default_timeout(self, client) -> None:
        assert client._timeout == PROVIDER_TIMEOUT_DEFAULT


@pytest.mark.unit
class TestCheckErrorResponse:
    """Tests for _check_error_response method."""

    def test_returns_none_for_200_status(self, client) -> None:
        assert client._check_error_response(make_response(200), "op") is None

    def test_429_with_retry_after(self, client) -> None:
        result = client._check_error_response(
            make_response(429, headers={"Retry-After": "60"}), "op"
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderRateLimitError)
        assert result.error.code == ErrorCode.PROVIDER_RATE_LIMITED
        assert result.error.retry_after == 60

    def test_429_without_retry_after(self, client) -> None:
        result = client._check_error_response(make_response(429), "op")

        assert result.error.retry_after is None

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_failures(self, client, status) -> None:
        result = client._check_error_response(make_response(status), "op")

        assert isinstance(result.error, ProviderAuthenticationError)
        assert result.error.provider_name == "test_provider"

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_errors_are_unavailable(self, client, status) -> None:
        result = client._check_error_response(make_response(status), "op")

        assert isinstance(result.error, ProviderUnavailableError)
        assert result.error.is_transient is True

    def test_404_is_invalid_response(self, client) -> None:
        result = client._check_error_response(make_response(404, text="nope"), "op")

        assert isinstance(result.error, ProviderInvalidResponseError)
        assert result.error.response_body == "nope"

    def test_unexpected_status_truncates_body(self, client) -> None:
        result = client._check_error_response(
            make_response(418, text="x" * 2000), "op"
        )

        assert isinstance(result.error, ProviderInvalidResponseError)
        assert len(result.error.response_body) == 500


@pytest.mark.unit
class TestExecuteRequest:
    """Transport failures via pytest-httpx."""

    async def test_timeout_is_unavailable(self, client, httpx_mock) -> None:
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        result = await client._execute_and_parse_object(
            path="/quote", params={"apikey": "k"}, operation="op"
        )

        assert isinstance(result.error, ProviderUnavailableError)
        assert "timed out" in result.error.message

    async def test_connection_error_is_unavailable(self, client, httpx_mock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("refused"))

        result = await client._execute_and_parse_object(
            path="/quote", params={"apikey": "k"}, operation="op"
        )

        assert isinstance(result.error, ProviderUnavailableError)
        assert "connect" in result.error.message

    async def test_non_object_json(self, client, httpx_mock) -> None:
        httpx_mock.add_response(json=[1, 2, 3])

        result = await client._execute_and_parse_object(
            path="/quote", params={}, operation="op"
        )

        assert isinstance(result.error, ProviderInvalidResponseError)

    async def test_invalid_json(self, client, httpx_mock) -> None:
        httpx_mock.add_response(text="<html>")

        result = await client._execute_and_parse_object(
            path="/quote", params={}, operation="op"
        )

        assert isinstance(result.error, ProviderInvalidResponseError)
        assert "Invalid JSON" in result.error.message

    async def test_object_json(self, client, httpx_mock) -> None:
        httpx_mock.add_response(json={"close": "1.00"})

        result = await client._execute_and_parse_object(
            path="/quote", params={}, operation="op"
        )

        assert result == Success(value={"close": "1.00"})


@pytest.mark.unit
class TestParsePrice:
    """parse_price accepts finite positive numbers only."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("201.45", Decimal("201.45")), (" 5 ", Decimal("5")), (12.5, Decimal("12.5"))],
    )
    def test_valid(self, raw, expected):
        assert parse_price(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "0", "-1.5", "NaN", "Infinity", True])
    def test_invalid(self, raw):
        assert parse_price(raw) is None

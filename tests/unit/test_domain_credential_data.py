"""Unit tests for credential payload variants and their JSON form."""

import json
from datetime import UTC, datetime

import pytest

from networth.core.enums import ErrorCode
from networth.core.errors import ValidationError
from networth.core.result import Failure, Success
from networth.domain.enums import CredentialType
from networth.domain.protocols import SerializationError
from networth.domain.value_objects import (
    APIKeyCredential,
    BasicAuthCredential,
    OAuthCredential,
    decode_credential_data,
    encode_credential_data,
    validate_credential_data,
)


@pytest.mark.unit
class TestValidateCredentialData:
    """Tests for validate_credential_data."""

    def test_api_key_with_key_is_valid(self):
        data = APIKeyCredential(key="pk_123")

        assert isinstance(
            validate_credential_data(CredentialType.API_KEY, data), Success
        )

    def test_api_key_without_key_fails(self):
        result = validate_credential_data(
            CredentialType.API_KEY, APIKeyCredential(key="")
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.field == "key"
        assert result.error.code == ErrorCode.VALIDATION_FAILED

    def test_oauth_requires_client_secret(self):
        result = validate_credential_data(
            CredentialType.OAUTH, OAuthCredential(client_id="id", client_secret="")
        )

        assert isinstance(result, Failure)
        assert result.error.field == "client_secret"

    def test_basic_auth_requires_password(self):
        result = validate_credential_data(
            CredentialType.BASIC_AUTH,
            BasicAuthCredential(username="jane", password=""),
        )

        assert isinstance(result, Failure)
        assert result.error.field == "password"

    def test_type_mismatch_fails_before_field_checks(self):
        """An API key payload declared as basic_auth is rejected."""
        result = validate_credential_data(
            CredentialType.BASIC_AUTH, APIKeyCredential(key="")
        )

        assert isinstance(result, Failure)
        assert result.error.field == "credential_type"
        assert "expected basic_auth" in result.error.message


@pytest.mark.unit
class TestEncodeCredentialData:
    """Tests for the JSON wire form."""

    def test_empty_optionals_are_omitted(self):
        raw = encode_credential_data(APIKeyCredential(key="pk_123"))

        assert json.loads(raw) == {"key": "pk_123"}

    def test_encoding_is_compact(self):
        raw = encode_credential_data(
            BasicAuthCredential(username="jane", password="pw", domain="corp")
        )

        assert raw == b'{"username":"jane","password":"pw","domain":"corp"}'

    def test_oauth_expiry_is_iso8601(self):
        expires = datetime(2024, 6, 1, 12, 30, tzinfo=UTC)
        raw = encode_credential_data(
            OAuthCredential(
                client_id="id",
                client_secret="secret",
                access_token="at",
                expires_at=expires,
            )
        )

        assert json.loads(raw)["expires_at"] == "2024-06-01T12:30:00+00:00"


@pytest.mark.unit
class TestDecodeCredentialData:
    """Tests for decode_credential_data."""

    def test_decodes_api_key(self):
        result = decode_credential_data(
            CredentialType.API_KEY, b'{"key":"k","secret":"s","environment":"prod"}'
        )

        assert isinstance(result, Success)
        assert result.value == APIKeyCredential(key="k", secret="s", environment="prod")

    def test_decodes_oauth_expiry(self):
        raw = (
            b'{"client_id":"id","client_secret":"cs",'
            b'"refresh_token":"rt","expires_at":"2024-06-01T12:30:00+00:00"}'
        )

        result = decode_credential_data(CredentialType.OAUTH, raw)

        assert isinstance(result, Success)
        assert isinstance(result.value, OAuthCredential)
        assert result.value.refresh_token == "rt"
        assert result.value.expires_at == datetime(2024, 6, 1, 12, 30, tzinfo=UTC)

    def test_stored_type_selects_variant(self):
        """The same JSON shape decodes per the stored type only."""
        result = decode_credential_data(
            CredentialType.BASIC_AUTH, b'{"username":"u","password":"p"}'
        )

        assert isinstance(result.value, BasicAuthCredential)

    @pytest.mark.parametrize(
        "raw",
        [
            b"not json",
            b"[1, 2, 3]",
            b'{"key": 42}',
            b'{"secret": "only"}',
            b"\xff\xfe",
        ],
    )
    def test_malformed_payloads_fail(self, raw):
        result = decode_credential_data(CredentialType.API_KEY, raw)

        assert isinstance(result, Failure)
        assert isinstance(result.error, SerializationError)
        assert result.error.code == ErrorCode.INVALID_INPUT

    def test_bad_expiry_fails(self):
        result = decode_credential_data(
            CredentialType.OAUTH,
            b'{"client_id":"id","client_secret":"cs","expires_at":"tomorrow"}',
        )

        assert isinstance(result, Failure)
        assert "expires_at" in result.error.message

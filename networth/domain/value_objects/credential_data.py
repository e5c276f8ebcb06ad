"""Decrypted credential payload variants.

A stored credential decrypts into exactly one of three payload shapes,
selected by its CredentialType. The JSON wire format is the persisted
plaintext inside `credentials.encrypted_data`; empty optional fields are
omitted.

Wire keys:
    api_key:    key, secret, environment
    oauth:      client_id, client_secret, access_token, refresh_token,
                token_type, expires_at (ISO-8601)
    basic_auth: username, password, domain

Usage:
    from networth.domain.value_objects import APIKeyCredential, encode_credential_data

    data = APIKeyCredential(key="pk_live_123", environment="production")
    raw = encode_credential_data(data)
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from networth.core.enums import ErrorCode
from networth.core.errors import ValidationError
from networth.core.result import Failure, Result, Success
from networth.domain.enums.credential_type import CredentialType
from networth.domain.protocols.encryption_protocol import SerializationError


@dataclass(frozen=True, slots=True, kw_only=True)
class APIKeyCredential:
    """API key payload.

    Attributes:
        key: API key (required).
        secret: Optional API secret.
        environment: Optional environment label (sandbox, production).
    """

    credential_type: ClassVar[CredentialType] = CredentialType.API_KEY

    key: str
    secret: str = ""
    environment: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Wire representation with empty optionals omitted."""
        return _compact(
            {"key": self.key, "secret": self.secret, "environment": self.environment}
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class OAuthCredential:
    """OAuth client registration with optional tokens.

    Attributes:
        client_id: OAuth client id (required).
        client_secret: OAuth client secret (required).
        access_token: Current access token, if any.
        refresh_token: Current refresh token, if any.
        token_type: Token type (usually "Bearer").
        expires_at: Access token expiry, if known.
    """

    credential_type: ClassVar[CredentialType] = CredentialType.OAUTH

    client_id: str
    client_secret: str
    access_token: str = ""
    refresh_token: str = ""
    token_type: str = ""
    expires_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Wire representation with empty optionals omitted."""
        return _compact(
            {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "access_token": self.access_token,
                "refresh_token": self.refresh_token,
                "token_type": self.token_type,
                "expires_at": self.expires_at.isoformat() if self.expires_at else "",
            }
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class BasicAuthCredential:
    """Username/password payload.

    Attributes:
        username: Login name (required).
        password: Password (required).
        domain: Optional domain or realm.
    """

    credential_type: ClassVar[CredentialType] = CredentialType.BASIC_AUTH

    username: str
    password: str
    domain: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Wire representation with empty optionals omitted."""
        return _compact(
            {"username": self.username, "password": self.password, "domain": self.domain}
        )


type CredentialData = APIKeyCredential | OAuthCredential | BasicAuthCredential


def _compact(fields: dict[str, str]) -> dict[str, Any]:
    return {name: value for name, value in fields.items() if value}


def validate_credential_data(
    credential_type: CredentialType, data: CredentialData
) -> Result[None, ValidationError]:
    """Check required fields and that the payload matches its declared type.

    Args:
        credential_type: Declared credential type.
        data: Payload to validate.

    Returns:
        Success(None) if valid.
        Failure(ValidationError) naming the offending field.
    """
    if data.credential_type is not credential_type:
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message=(
                    f"credential data is {data.credential_type.value}, "
                    f"expected {credential_type.value}"
                ),
                field="credential_type",
            )
        )

    match data:
        case APIKeyCredential(key=key):
            required = {"key": key}
        case OAuthCredential(client_id=client_id, client_secret=client_secret):
            required = {"client_id": client_id, "client_secret": client_secret}
        case BasicAuthCredential(username=username, password=password):
            required = {"username": username, "password": password}

    for field_name, value in required.items():
        if not value:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=f"{field_name} is required for {credential_type.value}",
                    field=field_name,
                )
            )
    return Success(value=None)


def encode_credential_data(data: CredentialData) -> bytes:
    """Serialize a payload to compact UTF-8 JSON."""
    return json.dumps(data.to_dict(), separators=(",", ":")).encode("utf-8")


def decode_credential_data(
    credential_type: CredentialType, raw: bytes
) -> Result[CredentialData, SerializationError]:
    """Parse decrypted JSON back into the variant for `credential_type`.

    Args:
        credential_type: Stored credential type; selects the variant.
        raw: Decrypted UTF-8 JSON bytes.

    Returns:
        Success(CredentialData) with the typed payload.
        Failure(SerializationError) if the JSON is malformed or required
        fields are missing.
    """
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return _decode_failure(credential_type, f"invalid JSON: {e}")

    if not isinstance(payload, dict):
        return _decode_failure(credential_type, "payload is not a JSON object")

    if any(not isinstance(value, str) for value in payload.values()):
        return _decode_failure(credential_type, "payload values must be strings")

    data: CredentialData
    match credential_type:
        case CredentialType.API_KEY:
            data = APIKeyCredential(
                key=payload.get("key", ""),
                secret=payload.get("secret", ""),
                environment=payload.get("environment", ""),
            )
        case CredentialType.OAUTH:
            expires_raw = payload.get("expires_at", "")
            try:
                expires_at = datetime.fromisoformat(expires_raw) if expires_raw else None
            except ValueError:
                return _decode_failure(credential_type, "expires_at is not ISO-8601")
            data = OAuthCredential(
                client_id=payload.get("client_id", ""),
                client_secret=payload.get("client_secret", ""),
                access_token=payload.get("access_token", ""),
                refresh_token=payload.get("refresh_token", ""),
                token_type=payload.get("token_type", ""),
                expires_at=expires_at,
            )
        case CredentialType.BASIC_AUTH:
            data = BasicAuthCredential(
                username=payload.get("username", ""),
                password=payload.get("password", ""),
                domain=payload.get("domain", ""),
            )

    match validate_credential_data(credential_type, data):
        case Failure(error=error):
            return _decode_failure(credential_type, error.message)
        case Success():
            return Success(value=data)


def _decode_failure(
    credential_type: CredentialType, reason: str
) -> Failure[SerializationError]:
    return Failure(
        error=SerializationError(
            code=ErrorCode.INVALID_INPUT,
            message=f"Failed to deserialize {credential_type.value} credential: {reason}",
        )
    )

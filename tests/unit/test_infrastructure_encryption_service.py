"""Unit tests for EncryptionService.

Tests cover:
- Factory create() with valid/invalid key lengths
- Encrypt/decrypt of byte payloads
- Token format (base64 of nonce || ciphertext || tag)
- Tamper detection and malformed input
"""

import base64
import os

import pytest

from networth.core.constants import GCM_NONCE_LENGTH, GCM_TAG_LENGTH
from networth.core.enums import ErrorCode
from networth.core.result import Failure, Success
from networth.domain.protocols import DecryptionError, EncryptionKeyError
from networth.infrastructure.security import EncryptionService


# =============================================================================
# Test Constants
# =============================================================================

VALID_KEY = os.urandom(32)  # 256 bits
OTHER_KEY = os.urandom(32)
SHORT_KEY = os.urandom(16)  # 128 bits (too short)


@pytest.fixture
def service() -> EncryptionService:
    """Provide valid encryption service."""
    result = EncryptionService.create(VALID_KEY)
    assert isinstance(result, Success)
    return result.value


# =============================================================================
# Test: Factory Creation
# =============================================================================


@pytest.mark.unit
class TestEncryptionServiceCreate:
    """Test EncryptionService.create() factory method."""

    def test_create_with_valid_key_returns_success(self):
        """Valid 32-byte key should create service successfully."""
        result = EncryptionService.create(VALID_KEY)

        assert isinstance(result, Success)
        assert isinstance(result.value, EncryptionService)

    def test_create_with_short_key_returns_failure(self):
        """Key shorter than 32 bytes should fail."""
        result = EncryptionService.create(SHORT_KEY)

        assert isinstance(result, Failure)
        assert isinstance(result.error, EncryptionKeyError)
        assert result.error.code == ErrorCode.ENCRYPTION_KEY_INVALID
        assert "16 bytes" in result.error.message
        assert result.error.details == {"expected_length": 32, "actual_length": 16}

    def test_create_with_empty_key_returns_failure(self):
        """Empty key should fail."""
        result = EncryptionService.create(b"")

        assert isinstance(result, Failure)
        assert "0 bytes" in result.error.message

    def test_ascii_configuration_key_is_accepted(self):
        """A 32-character configured key works once encoded."""
        result = EncryptionService.create(b"0123456789abcdef0123456789abcdef")

        assert isinstance(result, Success)


# =============================================================================
# Test: Encrypt/Decrypt
# =============================================================================


@pytest.mark.unit
class TestEncryptDecrypt:
    """Test encrypt() and decrypt()."""

    def test_decrypt_returns_original_plaintext(self, service):
        """Decrypting a token yields the bytes that were encrypted."""
        plaintext = b'{"key":"pk_live_123","secret":"s3cr3t"}'

        token = service.encrypt(plaintext)
        assert isinstance(token, Success)

        result = service.decrypt(token.value)
        assert isinstance(result, Success)
        assert result.value == plaintext

    @pytest.mark.parametrize(
        "plaintext",
        [
            b"",
            b"\x00",
            b"\xff\xfe\x80\x00\xc3\x28",  # not valid UTF-8
            bytes(range(256)),
            os.urandom(8192),
            "prêt-à-porter ☃".encode("utf-16"),
        ],
        ids=["empty", "nul", "invalid-utf8", "all-byte-values", "8kb-random", "utf16"],
    )
    def test_round_trip_arbitrary_bytes(self, service, plaintext):
        """decrypt(encrypt(x)) == x for any byte payload."""
        token = service.encrypt(plaintext).value

        raw = base64.b64decode(token)
        assert len(raw) == GCM_NONCE_LENGTH + len(plaintext) + GCM_TAG_LENGTH
        assert service.decrypt(token).value == plaintext

    def test_empty_plaintext_is_supported(self, service):
        """Empty payloads still produce a valid token."""
        token = service.encrypt(b"").value

        assert len(base64.b64decode(token)) == GCM_NONCE_LENGTH + GCM_TAG_LENGTH
        assert service.decrypt(token).value == b""

    def test_token_layout_is_nonce_ciphertext_tag(self, service):
        """Token decodes to nonce (12) + ciphertext (len) + tag (16)."""
        plaintext = b"hello world"

        raw = base64.b64decode(service.encrypt(plaintext).value)

        assert len(raw) == GCM_NONCE_LENGTH + len(plaintext) + GCM_TAG_LENGTH

    def test_same_plaintext_encrypts_differently(self, service):
        """Random nonce makes every token unique."""
        first = service.encrypt(b"same").value
        second = service.encrypt(b"same").value

        assert first != second

    def test_plaintext_not_visible_in_token(self, service):
        """Ciphertext should not contain the plaintext."""
        token = service.encrypt(b"super-secret-password").value

        assert b"super-secret-password" not in base64.b64decode(token)


# =============================================================================
# Test: Decryption Failures
# =============================================================================


@pytest.mark.unit
class TestDecryptFailures:
    """Test decrypt() rejects bad input."""

    def test_wrong_key_fails(self, service):
        """Token from one key cannot be opened with another."""
        token = service.encrypt(b"payload").value
        other = EncryptionService.create(OTHER_KEY).value

        result = other.decrypt(token)

        assert isinstance(result, Failure)
        assert isinstance(result.error, DecryptionError)
        assert result.error.code == ErrorCode.DECRYPTION_FAILED

    def test_tampered_ciphertext_fails(self, service):
        """Flipping a ciphertext byte breaks the auth tag."""
        raw = bytearray(base64.b64decode(service.encrypt(b"payload").value))
        raw[GCM_NONCE_LENGTH] ^= 0x01
        tampered = base64.b64encode(bytes(raw)).decode("ascii")

        result = service.decrypt(tampered)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.DECRYPTION_FAILED

    def test_tampered_tag_fails(self, service):
        """Flipping the last tag byte is detected."""
        raw = bytearray(base64.b64decode(service.encrypt(b"payload").value))
        raw[-1] ^= 0xFF
        tampered = base64.b64encode(bytes(raw)).decode("ascii")

        assert isinstance(service.decrypt(tampered), Failure)

    def test_invalid_base64_fails(self, service):
        """Non-base64 input is rejected."""
        result = service.decrypt("not base64!!")

        assert isinstance(result, Failure)
        assert "base64" in result.error.message

    def test_too_short_input_fails(self, service):
        """Input shorter than nonce + tag is rejected."""
        short = base64.b64encode(b"x" * 10).decode("ascii")

        result = service.decrypt(short)

        assert isinstance(result, Failure)
        assert "too short" in result.error.message
        assert result.error.details["minimum_length"] == 28

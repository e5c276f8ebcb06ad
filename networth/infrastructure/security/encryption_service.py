"""Encryption service for stored credentials.

Provides AES-256-GCM encryption for credential payloads kept in the
`credentials.encrypted_data` column.

Security Properties:
    - Confidentiality: Only holder of key can decrypt
    - Integrity: Tampering is detected via GCM authentication tag
    - Uniqueness: Random nonce per encryption prevents pattern analysis

Architecture:
    - Infrastructure adapter (catches cryptography exceptions)
    - Returns Result types (railway-oriented programming)
    - Uses domain error codes (ErrorCode enum)
"""

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from networth.core.constants import AES_KEY_LENGTH, GCM_NONCE_LENGTH, GCM_TAG_LENGTH
from networth.core.enums import ErrorCode
from networth.core.result import Failure, Result, Success
from networth.domain.protocols.encryption_protocol import (
    DecryptionError,
    EncryptionError,
    EncryptionKeyError,
)

__all__ = ["EncryptionService"]


class EncryptionService:
    """AES-256-GCM encryption service for credential payloads.

    Format:
        token = base64( nonce (12 bytes) || ciphertext || auth_tag (16 bytes) )

    Usage:
        >>> from networth.core.config import get_settings
        >>> key = get_settings().encryption_key.encode("utf-8")
        >>> match EncryptionService.create(key):
        ...     case Success(value=service):
        ...         result = service.encrypt(b'{"key":"abc123"}')
        ...     case Failure(error=error):
        ...         # Handle invalid key
        ...         ...

    Thread Safety:
        The AESGCM instance can be used concurrently from multiple threads.
    """

    MIN_ENCRYPTED_SIZE = GCM_NONCE_LENGTH + GCM_TAG_LENGTH

    def __init__(self, aesgcm: AESGCM) -> None:
        """Initialize with pre-validated AESGCM instance.

        Use EncryptionService.create() factory instead of direct construction.

        Args:
            aesgcm: Pre-initialized AESGCM cipher instance.
        """
        self._aesgcm = aesgcm

    @classmethod
    def create(cls, key: bytes) -> Result["EncryptionService", EncryptionKeyError]:
        """Create encryption service with validated key.

        Args:
            key: 32-byte (256-bit) encryption key.

        Returns:
            Success(EncryptionService) if key is valid.
            Failure(EncryptionKeyError) if key is invalid.
        """
        if len(key) != AES_KEY_LENGTH:
            return Failure(
                error=EncryptionKeyError(
                    code=ErrorCode.ENCRYPTION_KEY_INVALID,
                    message=(
                        f"Encryption key must be exactly {AES_KEY_LENGTH} bytes "
                        f"(256 bits), got {len(key)} bytes"
                    ),
                    details={
                        "expected_length": AES_KEY_LENGTH,
                        "actual_length": len(key),
                    },
                )
            )

        try:
            aesgcm = AESGCM(key)
        except (TypeError, ValueError) as e:
            return Failure(
                error=EncryptionKeyError(
                    code=ErrorCode.ENCRYPTION_KEY_INVALID,
                    message=f"Failed to initialize encryption: {e}",
                )
            )
        return Success(value=cls(aesgcm))

    def encrypt(self, plaintext: bytes) -> Result[str, EncryptionError]:
        """Encrypt bytes into a base64 token.

        A fresh random nonce is generated per call, so encrypting the same
        plaintext twice yields different tokens.

        Args:
            plaintext: Bytes to encrypt (may be empty).

        Returns:
            Success(str) with the base64 token.
            Failure(EncryptionError) if encryption fails.
        """
        try:
            nonce = os.urandom(GCM_NONCE_LENGTH)
            sealed = self._aesgcm.encrypt(nonce, plaintext, associated_data=None)
        except (TypeError, ValueError, OverflowError) as e:
            return Failure(
                error=EncryptionError(
                    code=ErrorCode.ENCRYPTION_FAILED,
                    message=f"Encryption failed: {e}",
                )
            )
        return Success(value=base64.b64encode(nonce + sealed).decode("ascii"))

    def decrypt(self, ciphertext: str) -> Result[bytes, EncryptionError]:
        """Decrypt a token produced by encrypt().

        Args:
            ciphertext: Base64 token from encrypt().

        Returns:
            Success(bytes) with the original plaintext.
            Failure(DecryptionError) on invalid base64, short input, wrong
            key or tampered data.
        """
        try:
            raw = base64.b64decode(ciphertext, validate=True)
        except (binascii.Error, ValueError):
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="Encrypted data is not valid base64",
                )
            )

        if len(raw) < self.MIN_ENCRYPTED_SIZE:
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message=(
                        f"Encrypted data too short: {len(raw)} bytes "
                        f"(minimum {self.MIN_ENCRYPTED_SIZE} bytes)"
                    ),
                    details={
                        "actual_length": len(raw),
                        "minimum_length": self.MIN_ENCRYPTED_SIZE,
                    },
                )
            )

        nonce = raw[:GCM_NONCE_LENGTH]
        sealed = raw[GCM_NONCE_LENGTH:]

        try:
            plaintext = self._aesgcm.decrypt(nonce, sealed, associated_data=None)
        except InvalidTag:
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="Failed to decrypt credentials: invalid key or tampered data",
                )
            )
        return Success(value=plaintext)

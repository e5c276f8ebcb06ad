"""Encryption protocol for stored credentials.

Credential payloads are sealed before they reach the database. The store
depends on this port; EncryptionService implements it with AES-256-GCM.

Architecture:
    - Domain layer protocol (port)
    - Infrastructure adapter: networth/infrastructure/security/encryption_service.py
    - Used by the credential store to seal and open credential payloads
"""

from dataclasses import dataclass
from typing import Protocol

from networth.core.errors import DomainError
from networth.core.result import Result


@dataclass(frozen=True, slots=True, kw_only=True)
class EncryptionError(DomainError):
    """Base encryption error.

    Parent of every failure the sealing layer returns;
    carried in Failure, never raised.
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class EncryptionKeyError(EncryptionError):
    """Invalid encryption key.

    The configured key is not exactly 32 bytes.
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class DecryptionError(EncryptionError):
    """Decryption failure.

    Occurs when:
    - Wrong encryption key
    - Data has been tampered with
    - Invalid encrypted data format (not base64, too short)
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class SerializationError(EncryptionError):
    """Serialization/deserialization failure.

    Occurs when decrypted bytes cannot be parsed back into a
    credential payload.
    """

    pass

# Encryption Protocol (Port)


class EncryptionProtocol(Protocol):
    """Protocol for encryption/decryption operations.

    Abstracts the cipher used by the credential store. The ciphertext is
    an opaque text token safe to persist in a string column.

    Example:
        class CredentialStore:
            def __init__(self, *, encryption: EncryptionProtocol, ...) -> None:
                self._encryption = encryption

            async def get_decrypted_data(self, service_type) -> Result[...]:
                result = self._encryption.decrypt(credential.encrypted_data)
                ...
    """

    def encrypt(self, plaintext: bytes) -> Result[str, EncryptionError]:
        """Encrypt bytes into an opaque text token.

        Args:
            plaintext: Bytes to encrypt (may be empty).

        Returns:
            Success(str) with base64 ciphertext.
            Failure(EncryptionError) if encryption fails.
        """
        ...

    def decrypt(self, ciphertext: str) -> Result[bytes, EncryptionError]:
        """Decrypt a token produced by encrypt().

        Args:
            ciphertext: Token returned by encrypt().

        Returns:
            Success(bytes) with the original plaintext.
            Failure(DecryptionError) if the token is malformed, tampered
            with, or was sealed under another key.
        """
        ...

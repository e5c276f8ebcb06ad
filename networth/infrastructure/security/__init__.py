"""Security adapters (credential encryption)."""

from networth.infrastructure.security.encryption_service import EncryptionService

__all__ = ["EncryptionService"]

"""Credential domain entity.

A sealed secret for one external service. The payload is an opaque
ciphertext; only the credential store holds the key to open it.

Lifecycle:
    created (is_active=True) → updated in place → deactivated.
    Deactivated rows are retained as history and never hard-deleted.

Usage:
    from networth.domain.entities import Credential
    from networth.domain.enums import CredentialType, ServiceType

    credential = Credential(
        service_type=ServiceType.KRAKEN,
        credential_type=CredentialType.API_KEY,
        name="Kraken trading key",
        encrypted_data=token,
    )
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from networth.domain.enums.credential_type import CredentialType
from networth.domain.enums.service_type import ServiceType


@dataclass
class Credential:
    """Encrypted credential for an external service.

    Attributes:
        service_type: Service the credential belongs to.
        credential_type: Payload variant inside encrypted_data.
        name: Human readable label.
        encrypted_data: Base64 AES-GCM token (opaque to the domain).
        is_active: False once deleted.
        id: Database identifier (None until persisted).
        created_at: Record creation timestamp.
        updated_at: Last payload change.
        last_used: Last successful decrypting read.
    """

    service_type: ServiceType
    credential_type: CredentialType
    name: str
    encrypted_data: str
    is_active: bool = True
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_used: datetime | None = None

    def __post_init__(self) -> None:
        """Validate credential after initialization.

        Raises:
            ValueError: If the name or ciphertext is empty.
        """
        if not self.name or not self.name.strip():
            raise ValueError("credential name cannot be empty")
        if not self.encrypted_data:
            raise ValueError("encrypted_data cannot be empty")

    def replace_payload(self, encrypted_data: str, now: datetime | None = None) -> None:
        """Swap in a re-encrypted payload and bump updated_at."""
        if not encrypted_data:
            raise ValueError("encrypted_data cannot be empty")
        self.encrypted_data = encrypted_data
        self.updated_at = now or datetime.now(UTC)

    def deactivate(self, now: datetime | None = None) -> None:
        """Soft-delete the credential."""
        self.is_active = False
        self.updated_at = now or datetime.now(UTC)

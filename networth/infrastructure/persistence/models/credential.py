"""Credential database model.

Security:
    - encrypted_data: base64 AES-256-GCM token; plaintext never stored
    - Rows are soft-deleted (is_active=false) and kept as history
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from networth.infrastructure.persistence.base import BaseMutableModel


class CredentialModel(BaseMutableModel):
    """Credential model for linked service secrets.

    Fields:
        id: Integer primary key (from BaseMutableModel)
        created_at: Timestamp when stored (from BaseMutableModel)
        updated_at: Timestamp of last payload change (from BaseMutableModel)
        service_type: Service identifier (plaid, kraken, ...)
        credential_type: Payload variant (api_key, oauth, basic_auth)
        name: Human readable label
        encrypted_data: Encrypted payload token
        is_active: False once deleted
        last_used: Last successful decrypting read

    Indexes:
        - uq_credentials_active_service: (service_type) WHERE is_active,
          at most one active credential per service
        - idx_credentials_service_type: (service_type) for history lookups
    """

    __tablename__ = "credentials"

    service_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Service identifier",
    )

    credential_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Payload variant: api_key, oauth, basic_auth",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Human readable label",
    )

    encrypted_data: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="base64(nonce || ciphertext || tag)",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    last_used: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        Index(
            "uq_credentials_active_service",
            "service_type",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
        Index("idx_credentials_service_type", "service_type"),
    )

"""CredentialRepository protocol for credential persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from datetime import datetime
from typing import Protocol

from networth.domain.entities.credential import Credential
from networth.domain.enums.service_type import ServiceType


class CredentialRepository(Protocol):
    """Credential repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Methods:
        find_active_by_service: Retrieve the active credential for a service
        list_active: Retrieve all active credentials
        add: Insert a new active credential
        update: Persist payload/active-flag changes
        touch_last_used: Stamp last_used
    """

    async def find_active_by_service(
        self, service_type: ServiceType
    ) -> Credential | None:
        """Find the active credential for a service.

        Args:
            service_type: Service identifier.

        Returns:
            Credential if an active one exists, None otherwise.
        """
        ...

    async def list_active(self) -> list[Credential]:
        """List all active credentials ordered by service type.

        Returns:
            List of active credentials (empty if none).
        """
        ...

    async def add(self, credential: Credential) -> Credential | None:
        """Insert a new credential.

        Args:
            credential: Entity to insert (id is ignored).

        Returns:
            The persisted credential with its id, or None when another
            active credential for the same service already exists.
        """
        ...

    async def update(self, credential: Credential) -> None:
        """Persist changes to an existing credential.

        Writes encrypted_data, is_active and updated_at.

        Args:
            credential: Entity with a database id.
        """
        ...

    async def touch_last_used(self, credential_id: int, when: datetime) -> None:
        """Set last_used for a credential.

        Args:
            credential_id: Database identifier.
            when: Timestamp to record.
        """
        ...

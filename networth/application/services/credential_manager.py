"""Credential manager.

Typed convenience layer over CredentialStore: builds payload variants
from plain arguments and narrows decrypted payloads to the variant the
caller expects.

Usage:
    from networth.core.container import build_credential_manager

    async with database.get_session() as session:
        manager = build_credential_manager(session)
        await manager.store_api_key(ServiceType.KRAKEN, "Kraken", key="...", secret="...")
        match await manager.get_api_key(ServiceType.KRAKEN):
            case Success(value=api_key):
                ...
"""

from datetime import datetime

from networth.application.services.credential_store import CredentialStore
from networth.core.enums import ErrorCode
from networth.core.errors import DomainError
from networth.core.result import Failure, Result, Success
from networth.domain.entities.credential import Credential
from networth.domain.enums import CredentialType, ServiceType
from networth.domain.errors import CredentialTypeError
from networth.domain.value_objects.credential_data import (
    APIKeyCredential,
    BasicAuthCredential,
    CredentialData,
    OAuthCredential,
)


class CredentialManager:
    """Typed credential operations.

    Args:
        store: Underlying encrypted store.
    """

    def __init__(self, store: CredentialStore) -> None:
        self._store = store

    # -------------------------------------------------------------------------
    # Store
    # -------------------------------------------------------------------------

    async def store_api_key(
        self,
        service_type: ServiceType,
        name: str,
        key: str,
        secret: str = "",
        environment: str = "",
    ) -> Result[Credential, DomainError]:
        """Store an API key credential."""
        data = APIKeyCredential(key=key, secret=secret, environment=environment)
        return await self._store.store(service_type, CredentialType.API_KEY, name, data)

    async def store_oauth(
        self,
        service_type: ServiceType,
        name: str,
        client_id: str,
        client_secret: str,
    ) -> Result[Credential, DomainError]:
        """Store an OAuth client registration (tokens are added via update_oauth)."""
        data = OAuthCredential(client_id=client_id, client_secret=client_secret)
        return await self._store.store(service_type, CredentialType.OAUTH, name, data)

    async def store_basic_auth(
        self,
        service_type: ServiceType,
        name: str,
        username: str,
        password: str,
        domain: str = "",
    ) -> Result[Credential, DomainError]:
        """Store a username/password credential."""
        data = BasicAuthCredential(username=username, password=password, domain=domain)
        return await self._store.store(service_type, CredentialType.BASIC_AUTH, name, data)

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    async def get_credential(
        self, service_type: ServiceType
    ) -> Result[CredentialData, DomainError]:
        """Decrypted payload of any variant."""
        return await self._store.get_decrypted_data(service_type)

    async def get_api_key(
        self, service_type: ServiceType
    ) -> Result[APIKeyCredential, DomainError]:
        """Decrypted API key payload.

        Returns:
            Failure(CredentialTypeError) if the service holds another variant.
        """
        match await self._store.get_decrypted_data(service_type):
            case Success(value=APIKeyCredential() as data):
                return Success(value=data)
            case Success(value=data):
                return Failure(
                    error=_wrong_type(service_type, CredentialType.API_KEY, data)
                )
            case Failure(error=error):
                return Failure(error=error)

    async def get_oauth(
        self, service_type: ServiceType
    ) -> Result[OAuthCredential, DomainError]:
        """Decrypted OAuth payload.

        Returns:
            Failure(CredentialTypeError) if the service holds another variant.
        """
        match await self._store.get_decrypted_data(service_type):
            case Success(value=OAuthCredential() as data):
                return Success(value=data)
            case Success(value=data):
                return Failure(
                    error=_wrong_type(service_type, CredentialType.OAUTH, data)
                )
            case Failure(error=error):
                return Failure(error=error)

    async def get_basic_auth(
        self, service_type: ServiceType
    ) -> Result[BasicAuthCredential, DomainError]:
        """Decrypted username/password payload.

        Returns:
            Failure(CredentialTypeError) if the service holds another variant.
        """
        match await self._store.get_decrypted_data(service_type):
            case Success(value=BasicAuthCredential() as data):
                return Success(value=data)
            case Success(value=data):
                return Failure(
                    error=_wrong_type(service_type, CredentialType.BASIC_AUTH, data)
                )
            case Failure(error=error):
                return Failure(error=error)

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    async def update_api_key(
        self,
        service_type: ServiceType,
        key: str,
        secret: str = "",
        environment: str = "",
    ) -> Result[Credential, DomainError]:
        """Replace the API key payload."""
        data = APIKeyCredential(key=key, secret=secret, environment=environment)
        return await self._store.update(service_type, data)

    async def update_oauth(
        self,
        service_type: ServiceType,
        client_id: str,
        client_secret: str,
        access_token: str = "",
        refresh_token: str = "",
        token_type: str = "",
        expires_at: datetime | None = None,
    ) -> Result[Credential, DomainError]:
        """Replace the OAuth payload, typically after a token refresh."""
        data = OAuthCredential(
            client_id=client_id,
            client_secret=client_secret,
            access_token=access_token,
            refresh_token=refresh_token,
            token_type=token_type,
            expires_at=expires_at,
        )
        return await self._store.update(service_type, data)

    async def update_basic_auth(
        self,
        service_type: ServiceType,
        username: str,
        password: str,
        domain: str = "",
    ) -> Result[Credential, DomainError]:
        """Replace the username/password payload."""
        data = BasicAuthCredential(username=username, password=password, domain=domain)
        return await self._store.update(service_type, data)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def delete_credential(
        self, service_type: ServiceType
    ) -> Result[None, DomainError]:
        """Deactivate the service's credential (idempotent)."""
        return await self._store.delete(service_type)

    async def list_credentials(self) -> Result[list[Credential], DomainError]:
        """Active credentials without payloads."""
        return await self._store.list()

    async def test_credential(
        self, service_type: ServiceType
    ) -> Result[None, DomainError]:
        """Check that the service's credential exists and decrypts."""
        match await self._store.get_decrypted_data(service_type):
            case Success():
                return Success(value=None)
            case Failure(error=error):
                return Failure(error=error)


def _wrong_type(
    service_type: ServiceType, expected: CredentialType, data: CredentialData
) -> CredentialTypeError:
    return CredentialTypeError(
        code=ErrorCode.CREDENTIAL_TYPE_UNSUPPORTED,
        message=(
            f"Credential for {service_type.value} is {data.credential_type.value}, "
            f"not {expected.value}"
        ),
        expected=expected.value,
        actual=data.credential_type.value,
    )

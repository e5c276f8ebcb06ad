"""Credential store.

Encrypts credential payloads and persists them with at most one active
credential per service.

Flow (store):
    validate → serialize → encrypt → check for active row → insert

Flow (get_decrypted_data):
    fetch active row → decrypt → deserialize → stamp last_used (best-effort)

Database failures are returned as CredentialStoreError values; nothing
raises out of this service for business conditions.
"""

from datetime import UTC, datetime

from networth.core.enums import ErrorCode
from networth.core.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from networth.core.result import Failure, Result, Success
from networth.domain.entities.credential import Credential
from networth.domain.enums import CredentialType, ServiceType
from networth.domain.errors import CredentialStoreError
from networth.domain.protocols import (
    CredentialRepository,
    EncryptionProtocol,
    LoggerProtocol,
)
from networth.domain.value_objects.credential_data import (
    CredentialData,
    decode_credential_data,
    encode_credential_data,
    validate_credential_data,
)


class CredentialStore:
    """Encrypted credential persistence.

    Dependencies (injected via constructor):
        - CredentialRepository: For persistence
        - EncryptionProtocol: For sealing payloads
        - LoggerProtocol: For structured logging

    Example:
        >>> store = CredentialStore(repository=repo, encryption=svc, logger=logger)
        >>> result = await store.store(
        ...     ServiceType.KRAKEN,
        ...     CredentialType.API_KEY,
        ...     "Kraken trading key",
        ...     APIKeyCredential(key="abc", secret="xyz"),
        ... )
    """

    def __init__(
        self,
        *,
        repository: CredentialRepository,
        encryption: EncryptionProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._repository = repository
        self._encryption = encryption
        self._logger = logger

    async def store(
        self,
        service_type: ServiceType,
        credential_type: CredentialType,
        name: str,
        data: CredentialData,
    ) -> Result[Credential, DomainError]:
        """Encrypt and store a new active credential.

        Args:
            service_type: Service the credential belongs to.
            credential_type: Declared payload variant.
            name: Human readable label.
            data: Payload to encrypt.

        Returns:
            Success(Credential): Persisted credential (payload still sealed).
            Failure(ValidationError): Missing fields or type mismatch.
            Failure(ConflictError): An active credential already exists.
            Failure(EncryptionError): Encryption failed.
            Failure(CredentialStoreError): Database failure.
        """
        if not name or not name.strip():
            return Failure(
                error=_validation_error("name is required", field="name")
            )

        match validate_credential_data(credential_type, data):
            case Failure(error=error):
                return Failure(error=error)

        match self._encryption.encrypt(encode_credential_data(data)):
            case Failure(error=error):
                self._logger.error(
                    "credential_encryption_failed",
                    service_type=service_type.value,
                    error_code=error.code.value,
                )
                return Failure(error=error)
            case Success(value=token):
                encrypted = token

        try:
            if await self._repository.find_active_by_service(service_type) is not None:
                return Failure(error=_already_exists(service_type))

            now = datetime.now(UTC)
            saved = await self._repository.add(
                Credential(
                    service_type=service_type,
                    credential_type=credential_type,
                    name=name.strip(),
                    encrypted_data=encrypted,
                    created_at=now,
                    updated_at=now,
                )
            )
        except Exception as e:
            return self._store_failed("store", service_type, e)

        if saved is None:
            return Failure(error=_already_exists(service_type))

        self._logger.info(
            "credential_stored",
            service_type=service_type.value,
            credential_type=credential_type.value,
            credential_id=saved.id,
        )
        return Success(value=saved)

    async def get_by_service(
        self, service_type: ServiceType
    ) -> Result[Credential, DomainError]:
        """Fetch the active credential without decrypting it.

        Returns:
            Success(Credential) or Failure(NotFoundError).
        """
        try:
            credential = await self._repository.find_active_by_service(service_type)
        except Exception as e:
            return self._store_failed("get_by_service", service_type, e)

        if credential is None:
            return Failure(error=_not_found(service_type))
        return Success(value=credential)

    async def get_decrypted_data(
        self, service_type: ServiceType
    ) -> Result[CredentialData, DomainError]:
        """Fetch, decrypt and deserialize the active credential.

        Stamps last_used on success; a failure to stamp is logged and
        does not fail the read.

        Returns:
            Success(CredentialData): Typed payload.
            Failure(NotFoundError): No active credential.
            Failure(DecryptionError): Tampered data or wrong key.
            Failure(SerializationError): Payload is not a valid credential.
        """
        match await self.get_by_service(service_type):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=credential):
                pass

        match self._encryption.decrypt(credential.encrypted_data):
            case Failure(error=error):
                self._logger.error(
                    "credential_decryption_failed",
                    service_type=service_type.value,
                    credential_id=credential.id,
                    error_code=error.code.value,
                )
                return Failure(error=error)
            case Success(value=plaintext):
                pass

        match decode_credential_data(credential.credential_type, plaintext):
            case Failure(error=error):
                self._logger.error(
                    "credential_payload_invalid",
                    service_type=service_type.value,
                    credential_id=credential.id,
                )
                return Failure(error=error)
            case Success(value=data):
                pass

        if credential.id is not None:
            try:
                await self._repository.touch_last_used(credential.id, datetime.now(UTC))
            except Exception as e:
                self._logger.warning(
                    "credential_last_used_update_failed",
                    service_type=service_type.value,
                    credential_id=credential.id,
                    error_type=type(e).__name__,
                )

        return Success(value=data)

    async def update(
        self, service_type: ServiceType, data: CredentialData
    ) -> Result[Credential, DomainError]:
        """Re-encrypt and overwrite the active credential's payload.

        The payload variant must match the stored credential type.

        Returns:
            Success(Credential) with the new ciphertext.
            Failure(NotFoundError), Failure(ValidationError),
            Failure(EncryptionError) or Failure(CredentialStoreError).
        """
        match await self.get_by_service(service_type):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=credential):
                pass

        match validate_credential_data(credential.credential_type, data):
            case Failure(error=error):
                return Failure(error=error)

        match self._encryption.encrypt(encode_credential_data(data)):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=token):
                credential.replace_payload(token)

        try:
            await self._repository.update(credential)
        except Exception as e:
            return self._store_failed("update", service_type, e)

        self._logger.info(
            "credential_updated",
            service_type=service_type.value,
            credential_id=credential.id,
        )
        return Success(value=credential)

    async def delete(self, service_type: ServiceType) -> Result[None, DomainError]:
        """Deactivate the active credential, if any.

        Idempotent: deleting a service with no active credential succeeds.
        """
        try:
            credential = await self._repository.find_active_by_service(service_type)
            if credential is None:
                return Success(value=None)
            credential.deactivate()
            await self._repository.update(credential)
        except Exception as e:
            return self._store_failed("delete", service_type, e)

        self._logger.info(
            "credential_deactivated",
            service_type=service_type.value,
            credential_id=credential.id,
        )
        return Success(value=None)

    async def list(self) -> Result[list[Credential], DomainError]:
        """Active credentials ordered by service type (payloads sealed)."""
        try:
            return Success(value=await self._repository.list_active())
        except Exception as e:
            return self._store_failed("list", None, e)

    def _store_failed(
        self, operation: str, service_type: ServiceType | None, error: Exception
    ) -> Failure[DomainError]:
        self._logger.error(
            "credential_store_database_error",
            error=error,
            operation=operation,
            service_type=service_type.value if service_type else None,
        )
        return Failure(
            error=CredentialStoreError(
                code=ErrorCode.CREDENTIAL_STORE_FAILED,
                message=f"Credential {operation} failed: database error",
            )
        )


def _not_found(service_type: ServiceType) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.CREDENTIAL_NOT_FOUND,
        message=f"No active credential for {service_type.value}",
        resource_type="Credential",
        resource_id=service_type.value,
    )


def _already_exists(service_type: ServiceType) -> ConflictError:
    return ConflictError(
        code=ErrorCode.CREDENTIAL_ALREADY_EXISTS,
        message=f"An active credential already exists for {service_type.value}",
        resource_type="Credential",
        conflicting_field="service_type",
    )


def _validation_error(message: str, *, field: str) -> ValidationError:
    return ValidationError(code=ErrorCode.VALIDATION_FAILED, message=message, field=field)

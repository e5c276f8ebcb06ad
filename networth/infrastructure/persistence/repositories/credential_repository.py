"""CredentialRepository - SQLAlchemy implementation.

Adapter for hexagonal architecture.
Maps between domain Credential entities and database CredentialModel.
"""

from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from networth.domain.entities.credential import Credential
from networth.domain.enums.credential_type import CredentialType
from networth.domain.enums.service_type import ServiceType
from networth.infrastructure.persistence.models.credential import CredentialModel


class CredentialRepository:
    """SQLAlchemy implementation of CredentialRepository protocol.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = CredentialRepository(session)
        ...     credential = await repo.find_active_by_service(ServiceType.KRAKEN)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_active_by_service(
        self, service_type: ServiceType
    ) -> Credential | None:
        """Find the active credential for a service.

        Args:
            service_type: Service identifier.

        Returns:
            Domain Credential entity if found, None otherwise.
        """
        stmt = select(CredentialModel).where(
            CredentialModel.service_type == service_type.value,
            CredentialModel.is_active.is_(True),
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_domain(model)

    async def list_active(self) -> list[Credential]:
        """List active credentials ordered by service type.

        Returns:
            List of active credentials (empty if none).
        """
        stmt = (
            select(CredentialModel)
            .where(CredentialModel.is_active.is_(True))
            .order_by(CredentialModel.service_type)
        )
        result = await self.session.execute(stmt)
        models = result.scalars().all()

        return [self._to_domain(model) for model in models]

    async def add(self, credential: Credential) -> Credential | None:
        """Insert a new credential.

        The partial unique index on active service_type rejects a second
        active row; that rejection is reported as None.

        Args:
            credential: Entity to insert.

        Returns:
            Persisted credential with its id, or None on a duplicate.

        Raises:
            SQLAlchemyError: Any other database failure, after rollback.
        """
        model = self._to_model(credential)
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return None
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        return self._to_domain(model)

    async def update(self, credential: Credential) -> None:
        """Persist payload and active-flag changes.

        Args:
            credential: Entity with a database id.

        Raises:
            NoResultFound: If the credential row doesn't exist.
        """
        stmt = select(CredentialModel).where(CredentialModel.id == credential.id)
        result = await self.session.execute(stmt)
        model = result.scalar_one()

        model.name = credential.name
        model.encrypted_data = credential.encrypted_data
        model.is_active = credential.is_active
        model.updated_at = credential.updated_at

        await self.session.commit()

    async def touch_last_used(self, credential_id: int, when: datetime) -> None:
        """Set last_used without touching updated_at.

        Args:
            credential_id: Database identifier.
            when: Timestamp to record.
        """
        stmt = (
            update(CredentialModel)
            .where(CredentialModel.id == credential_id)
            .values(last_used=when, updated_at=CredentialModel.updated_at)
        )
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    def _to_domain(self, model: CredentialModel) -> Credential:
        """Convert database model to domain entity.

        Args:
            model: SQLAlchemy CredentialModel instance.

        Returns:
            Domain Credential entity.
        """
        return Credential(
            id=model.id,
            service_type=ServiceType(model.service_type),
            credential_type=CredentialType(model.credential_type),
            name=model.name,
            encrypted_data=model.encrypted_data,
            is_active=model.is_active,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
            last_used=_as_utc(model.last_used) if model.last_used else None,
        )

    def _to_model(self, entity: Credential) -> CredentialModel:
        """Convert domain entity to database model.

        Args:
            entity: Domain Credential entity.

        Returns:
            SQLAlchemy CredentialModel instance (id assigned on insert).
        """
        return CredentialModel(
            service_type=entity.service_type.value,
            credential_type=entity.credential_type.value,
            name=entity.name,
            encrypted_data=entity.encrypted_data,
            is_active=entity.is_active,
            last_used=entity.last_used,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)

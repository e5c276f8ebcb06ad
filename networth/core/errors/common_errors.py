"""Common error classes used across domains.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found
- ConflictError: Resource conflicts (duplicate active credential)

Usage:
    from networth.core.errors import NotFoundError
    from networth.core.enums import ErrorCode
    from networth.core.result import Failure

    return Failure(error=NotFoundError(
        code=ErrorCode.CREDENTIAL_NOT_FOUND,
        message="No active credential for kraken",
        resource_type="Credential",
        resource_id="kraken",
    ))
"""

from dataclasses import dataclass

from networth.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (Credential, StockPrice).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate, state conflict).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has the conflict.
    """

    resource_type: str
    conflicting_field: str | None = None

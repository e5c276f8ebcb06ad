"""Credential error types.

Missing and duplicate credentials use the core NotFoundError and
ConflictError; this module holds the credential-specific cases.
"""

from dataclasses import dataclass

from networth.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class CredentialTypeError(DomainError):
    """Stored credential is not the variant the caller asked for.

    Attributes:
        expected: Credential type requested.
        actual: Credential type found.
    """

    expected: str
    actual: str


@dataclass(frozen=True, slots=True, kw_only=True)
class CredentialStoreError(DomainError):
    """Database failure while reading or writing credentials."""

    pass

"""Result types for railway-oriented programming.

Operations that can fail for business reasons (missing credential, provider
rate limit, tampered ciphertext) return a Result instead of raising. Callers
branch on the variant with structural pattern matching.

Usage:
    async def lookup(service: ServiceType) -> Result[Credential, NotFoundError]:
        credential = await repo.find_active_by_service(service)
        if credential is None:
            return Failure(error=NotFoundError(...))
        return Success(value=credential)

    match await lookup(ServiceType.KRAKEN):
        case Success(value=credential):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: The error describing why the operation failed.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]

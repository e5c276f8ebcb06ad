"""DomainError: the base of every error value in networth.

Errors are plain frozen dataclasses carried in Failure(error=...). They
are never raised, so they do not derive from Exception.

    @dataclass(frozen=True, slots=True, kw_only=True)
    class PriceError(DomainError):
        symbol: str | None = None
"""

from dataclasses import dataclass
from typing import Any

from networth.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Error value.

    Attributes:
        code: ErrorCode used by callers to branch on the failure.
        message: Text safe to show to the user.
        details: Extra debugging context, never secrets.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

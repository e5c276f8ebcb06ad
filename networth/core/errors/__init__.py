"""Core errors package.

Usage:
    from networth.core.errors import DomainError, ValidationError, NotFoundError
"""

from networth.core.errors.common_errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from networth.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
]

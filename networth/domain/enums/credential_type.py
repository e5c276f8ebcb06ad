"""Authentication mechanism types for stored credentials.

The credential type selects which payload variant an encrypted blob
decodes into: an API key, an OAuth client registration, or a
username/password pair.

Usage:
    from networth.domain.enums import CredentialType

    if credential.credential_type is CredentialType.OAUTH:
        ...
"""

from enum import Enum


class CredentialType(str, Enum):
    """Authentication mechanism of a stored credential.

    String Enum:
        Inherits from str for easy serialization and database storage.
        Values match the persisted `credential_type` column.
    """

    API_KEY = "api_key"
    """Static API key, with optional secret and environment (sandbox, production)."""

    OAUTH = "oauth"
    """OAuth client credentials plus optional access/refresh tokens."""

    BASIC_AUTH = "basic_auth"
    """Username and password, with optional domain."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all credential type values as strings.

        Returns:
            list[str]: List of credential type values.
        """
        return [cred_type.value for cred_type in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid credential type.

        Args:
            value: String to check.

        Returns:
            bool: True if value is a valid credential type.
        """
        return value in cls.values()

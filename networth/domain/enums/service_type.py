"""External services a credential can belong to.

At most one active credential exists per service.
"""

from enum import Enum


class ServiceType(str, Enum):
    """Financial or data service identifier."""

    PLAID = "plaid"
    ALLY_INVEST = "ally_invest"
    KRAKEN = "kraken"
    FIDELITY = "fidelity"
    MORGAN_STANLEY = "morgan_stanley"
    MARKET_DATA = "market_data"

    @classmethod
    def values(cls) -> list[str]:
        """Get all service identifiers as strings.

        Returns:
            list[str]: List of service identifiers.
        """
        return [service.value for service in cls]

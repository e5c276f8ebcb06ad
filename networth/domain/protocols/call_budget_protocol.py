"""Provider call budget protocol.

Port for tracking how many outbound calls each price provider has
received. Implementations are process-wide and thread-safe.
"""

from typing import Protocol

from networth.domain.value_objects.call_budget import BudgetSnapshot


class CallBudgetProtocol(Protocol):
    """Per-provider daily and per-minute call allowance."""

    def try_acquire(self, provider: str) -> bool:
        """Reserve one call if both counters allow it.

        The check and the increment happen atomically; a False return
        leaves the counters untouched.

        Args:
            provider: Provider name.

        Returns:
            True if the call may proceed.
        """
        ...

    def remaining(self, provider: str) -> int:
        """Calls available right now (min of daily and minute remaining)."""
        ...

    def snapshot(self) -> dict[str, BudgetSnapshot]:
        """Usage of every configured provider keyed by name."""
        ...

    def reset(self, provider: str | None = None) -> None:
        """Clear counters for one provider, or all when None."""
        ...

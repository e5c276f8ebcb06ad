"""Logging port used by application services.

Services take a LoggerProtocol in their constructor and never import
structlog. Messages are snake_case event names; everything variable goes
into keyword context:

    logger.info("price_refreshed", symbol="AAPL", decision="primary")

Levels as used here:
    info     cache hits, provider fetches, credential lifecycle events
    warning  fallback taken, stale price served, last_used stamp failed
    error    provider exhausted with no cache, database or crypto failure

Never pass API keys, client secrets, passwords or decrypted credential
payloads as context.
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Structured logger port (implemented by ConsoleAdapter)."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Error-level event.

        Args:
            message: Event name.
            error: Exception behind the failure, if any. Implementations
                flatten it into error_type and error_message fields.
            **context: Key-value context.
        """
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Logger that adds ``context`` to every event; the receiver is unchanged."""
        ...

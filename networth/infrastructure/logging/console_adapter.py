"""structlog-backed LoggerProtocol implementation writing to stdout.

The container renders JSON everywhere except development, where the
colored console renderer is easier to read. ConsoleAdapter satisfies
LoggerProtocol structurally and does not subclass it.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


class ConsoleAdapter:
    """Event-style logger: ``logger.info("price_cache_hit", symbol="AAPL")``.

    Constructing an adapter configures structlog globally, so the
    container builds exactly one.

    Args:
        use_json: Render JSON lines instead of the console renderer.
        level: Minimum level name; unknown names mean INFO.
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        renderer: structlog.types.Processor = (
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer(colors=True)
        )
        threshold = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                renderer,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(threshold),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )
        self._logger = structlog.get_logger()

    @classmethod
    def _wrapping(cls, logger: Any) -> ConsoleAdapter:
        adapter = cls.__new__(cls)
        adapter._logger = logger
        return adapter

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log at error level; an exception becomes error_type/error_message."""
        if error is not None:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
        self._logger.error(message, **context)

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Child adapter carrying ``context`` on every event; self is unchanged."""
        return ConsoleAdapter._wrapping(self._logger.bind(**context))

"""Structured log sink interface.

Pipeline components report what they do as ``(level, category, message,
context)`` events. Where those events end up (structlog, an in-memory debug
panel, a toast) is the caller's choice.
"""

import logging
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class LogSink(Protocol):
    """Anything that accepts structured log events."""

    def log(
        self,
        level: str,
        category: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> Any: ...


def emit(
    sink: LogSink | None,
    level: str,
    category: str,
    message: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Send an event to a sink without letting sink failures escape.

    Args:
        sink: The sink to deliver to. None discards the event.
        level: One of debug, info, warn, error.
        category: Component name, e.g. "acquisition".
        message: Short event description.
        context: Structured payload.
    """
    if sink is None:
        return
    try:
        sink.log(level, category, message, context or {})
    except Exception as e:
        logger.warning(f"Log sink {type(sink).__name__} rejected event '{message}': {e}")

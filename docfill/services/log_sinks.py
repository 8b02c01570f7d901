"""Log sink implementations.

StructlogSink forwards pipeline events to structlog. DebugLog keeps the most
recent events in memory so a debug panel can filter and export them.
"""

import json
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any

import structlog

from docfill.interfaces.log_sink import LogSink, emit

_STRUCTLOG_METHODS = {
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "warning": "warning",
    "error": "error",
}


class StructlogSink:
    """Sends events to a structlog logger, with the category bound."""

    def __init__(self, logger_name: str = "docfill.events") -> None:
        self._logger = structlog.get_logger(logger_name)

    def log(
        self,
        level: str,
        category: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        method = getattr(self._logger, _STRUCTLOG_METHODS.get(level, "info"))
        method(message, category=category, **(context or {}))


class DebugLog:
    """In-memory ring buffer of recent events, newest first.

    Attributes:
        capacity: Maximum number of entries retained.
    """

    def __init__(self, capacity: int = 1000) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._entries: deque[dict[str, Any]] = deque(maxlen=capacity)

    def log(
        self,
        level: str,
        category: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        entry = {
            "id": uuid.uuid4().hex,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "category": category,
            "message": message,
            "data": dict(context or {}),
        }
        self._entries.appendleft(entry)
        return entry

    def get_logs(
        self,
        level: str | None = None,
        category: str | None = None,
        since: datetime | str | None = None,
    ) -> list[dict[str, Any]]:
        """Return entries, newest first, optionally filtered.

        Args:
            level: Keep only entries with this level.
            category: Keep only entries with this category.
            since: Keep only entries at or after this time (datetime or ISO string).
        """
        entries = list(self._entries)
        if level:
            entries = [e for e in entries if e["level"] == level]
        if category:
            entries = [e for e in entries if e["category"] == category]
        if since is not None:
            since_dt = datetime.fromisoformat(since) if isinstance(since, str) else since
            if since_dt.tzinfo is None:
                since_dt = since_dt.replace(tzinfo=timezone.utc)
            entries = [e for e in entries if datetime.fromisoformat(e["timestamp"]) >= since_dt]
        return entries

    def export_logs(self) -> str:
        """Serialize every retained entry as a JSON document."""
        return json.dumps(
            {
                "exported_at": datetime.now(timezone.utc).isoformat(),
                "total_logs": len(self._entries),
                "logs": list(self._entries),
            },
            indent=2,
            default=str,
        )

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class FanoutSink:
    """Delivers every event to several sinks; one failing sink does not stop the rest."""

    def __init__(self, *sinks: LogSink) -> None:
        self._sinks = sinks

    def log(
        self,
        level: str,
        category: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        for sink in self._sinks:
            emit(sink, level, category, message, context)

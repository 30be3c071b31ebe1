"""Bounded, user-facing run log."""

import logging
from collections import deque

from cforce.config.constants import LogSeverity
from cforce.core.models import LogEntry

logger = logging.getLogger(__name__)

_LEVELS = {
    LogSeverity.INFO: logging.INFO,
    LogSeverity.SUCCESS: logging.INFO,
    LogSeverity.WARNING: logging.WARNING,
    LogSeverity.ERROR: logging.ERROR,
}


class RunLog:
    """Append-only log that keeps the most recent entries in arrival order."""

    def __init__(self, max_entries: int = 50):
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)

    def add(self, message: str, severity: LogSeverity = LogSeverity.INFO) -> LogEntry:
        entry = LogEntry(message=message, severity=severity)
        self._entries.append(entry)
        logger.log(_LEVELS[severity], "[%s] %s", severity.value, message)
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

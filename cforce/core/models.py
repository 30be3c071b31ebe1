"""Value types shared across layers."""

from dataclasses import dataclass, field
from datetime import datetime

from cforce.config.constants import ChatRole, LogSeverity


@dataclass(frozen=True)
class ChatMessage:
    """A single turn of the assistant conversation."""

    role: ChatRole
    content: str


@dataclass(frozen=True)
class LogEntry:
    """A single line of the user-facing run log."""

    message: str
    severity: LogSeverity = LogSeverity.INFO
    timestamp: str = field(default_factory=lambda: datetime.now().strftime("%H:%M:%S"))

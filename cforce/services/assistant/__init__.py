"""Security assistant service."""

from cforce.services.assistant.agent import SecurityAssistant, build_conversation
from cforce.services.assistant.context import select_context_snapshot, serialize_context

__all__ = [
    "SecurityAssistant",
    "build_conversation",
    "select_context_snapshot",
    "serialize_context",
]

"""Security assistant: conversational follow-ups grounded on the last result."""

import logging
from collections.abc import Sequence

from cforce.config.constants import ChatRole, ResponseFormat
from cforce.config.message import CHAT_ERROR_FALLBACK, EMPTY_REPLY_FALLBACK
from cforce.config.prompts import build_assistant_system_prompt
from cforce.config.settings import Settings
from cforce.core.models import ChatMessage
from cforce.infrastructure.llm.gateway import GenerationConfig, ModelGateway
from cforce.services.assistant.context import serialize_context
from cforce.services.pipelines.models import PipelineResult

logger = logging.getLogger(__name__)


def build_conversation(
    query: str,
    history: Sequence[ChatMessage],
    context_snapshot: PipelineResult | None,
) -> list[ChatMessage]:
    """Prior turns followed by one user turn carrying the context and the query."""
    final_turn = ChatMessage(
        role=ChatRole.USER,
        content=f"{serialize_context(context_snapshot)}\n\nUSER_QUERY: {query}",
    )
    return [*history, final_turn]


class SecurityAssistant:
    """Defensive-only security analyst. Keeps no state between calls."""

    def __init__(self, settings: Settings, gateway: ModelGateway) -> None:
        self.settings = settings
        self.gateway = gateway

    def generation_config(self) -> GenerationConfig:
        return GenerationConfig(
            model=self.settings.assistant_model,
            temperature=self.settings.assistant_temperature,
            top_p=self.settings.assistant_top_p,
            response_format=ResponseFormat.TEXT,
            system_instruction=build_assistant_system_prompt(),
            thinking_budget=self.settings.assistant_thinking_budget,
        )

    async def ask(
        self,
        query: str,
        history: Sequence[ChatMessage],
        context_snapshot: PipelineResult | None,
    ) -> str:
        """Return the model's reply, or a fixed fallback string. Never raises."""
        conversation = build_conversation(query, history, context_snapshot)
        try:
            reply = await self.gateway.send(conversation, self.generation_config())
        except Exception as e:
            logger.error("Assistant chat core error: %s", e, exc_info=True)
            return CHAT_ERROR_FALLBACK
        return reply or EMPTY_REPLY_FALLBACK

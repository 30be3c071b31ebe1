"""
Model gateway: the single chokepoint for calls to the hosted Gemini model.
"""
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from google import genai
from google.genai import types

from cforce.config.constants import ChatRole, ModelTool, ResponseFormat
from cforce.config.settings import Settings
from cforce.core.exceptions import GatewayError
from cforce.core.models import ChatMessage

logger = logging.getLogger(__name__)

_ROLE_MAP = {
    ChatRole.USER: "user",
    ChatRole.ASSISTANT: "model",
}

_MIME_TYPES = {
    ResponseFormat.JSON: "application/json",
    ResponseFormat.TEXT: "text/plain",
}

Conversation = str | Sequence[ChatMessage]


@dataclass(frozen=True)
class GenerationConfig:
    """Generation options for one gateway call."""

    model: str
    temperature: float | None = None
    top_p: float | None = None
    response_format: ResponseFormat = ResponseFormat.TEXT
    tools: frozenset[ModelTool] = field(default_factory=frozenset)
    system_instruction: str | None = None
    thinking_budget: int | None = None


def build_contents(conversation: Conversation) -> str | list[types.Content]:
    """Map a one-shot prompt or role-tagged turns onto Gemini contents."""
    if isinstance(conversation, str):
        return conversation
    return [
        types.Content(role=_ROLE_MAP[msg.role], parts=[types.Part(text=msg.content)])
        for msg in conversation
    ]


def build_request_config(config: GenerationConfig) -> types.GenerateContentConfig:
    """Translate a GenerationConfig into the SDK request configuration."""
    tools = []
    if ModelTool.WEB_SEARCH in config.tools:
        tools.append(types.Tool(google_search=types.GoogleSearch()))

    thinking_config = None
    if config.thinking_budget is not None:
        thinking_config = types.ThinkingConfig(thinking_budget=config.thinking_budget)

    return types.GenerateContentConfig(
        system_instruction=config.system_instruction,
        temperature=config.temperature,
        top_p=config.top_p,
        response_mime_type=_MIME_TYPES[config.response_format],
        tools=tools or None,
        thinking_config=thinking_config,
    )


class ModelGateway:
    """Sends conversations to the remote model and returns the raw text.

    Every failure, whatever its cause, surfaces as ``GatewayError``. Calls are
    never retried.
    """

    def __init__(self, settings: Settings, client: genai.Client | None = None) -> None:
        self.settings = settings
        self._client = client

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    async def send(self, conversation: Conversation, config: GenerationConfig) -> str:
        """
        Issue one generate call.

        Args:
            conversation: A single instruction string, or ordered chat turns
            config: Generation options

        Returns:
            The generated text, or an empty string when the model returned none

        Raises:
            GatewayError: On any transport, authentication or quota failure
        """
        logger.debug(
            "Gateway request: model=%s format=%s tools=%s",
            config.model,
            config.response_format.value,
            sorted(t.value for t in config.tools),
        )
        try:
            client = self._get_client()
            response = await client.aio.models.generate_content(
                model=config.model,
                contents=build_contents(conversation),
                config=build_request_config(config),
            )
        except Exception as e:
            logger.error("Gateway call to %s failed: %s", config.model, e, exc_info=True)
            raise GatewayError(f"Model call to {config.model} failed") from e

        return response.text or ""

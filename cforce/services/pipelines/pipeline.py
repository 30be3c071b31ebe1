"""Intelligence pipelines: prompt, gateway call, validation."""

import logging
import time

from cforce.config.constants import ModelTool, PipelineKind, ResponseFormat
from cforce.config.prompts import build_pipeline_prompt
from cforce.config.settings import Settings
from cforce.core.exceptions import GatewayError, ParseError, PipelineError
from cforce.infrastructure.llm.gateway import GenerationConfig, ModelGateway
from cforce.infrastructure.logging.logger import StructuredLogger
from cforce.services.pipelines.models import PipelineResult
from cforce.services.pipelines.validation import parse_result

logger = logging.getLogger(__name__)


class IntelPipeline:
    """One isolated target-to-result analysis flow.

    Stateless between calls. Concurrent runs are not guarded here; the
    orchestrator serializes runs per kind.
    """

    kind: PipelineKind

    def __init__(self, settings: Settings, gateway: ModelGateway):
        self.settings = settings
        self.gateway = gateway
        self.events = StructuredLogger(__name__)

    def generation_config(self) -> GenerationConfig:
        tools = frozenset({ModelTool.WEB_SEARCH}) if self.settings.pipeline_web_search else frozenset()
        return GenerationConfig(
            model=self.settings.pipeline_model,
            response_format=ResponseFormat.JSON,
            tools=tools,
            thinking_budget=self.settings.pipeline_thinking_budget,
        )

    async def run(self, target: str) -> PipelineResult:
        """
        Analyze one target.

        Raises:
            PipelineError: chained to the GatewayError or ParseError behind it
        """
        logger.info("%s run started for target=%s", self.kind.value, target)
        prompt = build_pipeline_prompt(self.kind, target)
        start_time = time.time()
        try:
            raw = await self.gateway.send(prompt, self.generation_config())
        except GatewayError as e:
            self.events.log_error(self.kind.value, e, {"target": target})
            raise PipelineError(self.kind) from e

        result = parse_result(self.kind, raw)
        execution_time = (time.time() - start_time) * 1000
        if isinstance(result, ParseError):
            self.events.log_error(
                self.kind.value, result, {"target": target, "excerpt": result.raw_excerpt}
            )
            raise PipelineError(self.kind) from result

        self.events.log_step(
            self.kind.value,
            {"target": target, "fields": sorted(result.model_fields_set)},
            duration_ms=execution_time,
        )
        return result


class ScannerPipeline(IntelPipeline):
    """Passive website security and vulnerability scan."""

    kind = PipelineKind.SCAN


class OsintPipeline(IntelPipeline):
    """Passive OSINT gathering for a domain."""

    kind = PipelineKind.OSINT


class IpExplorerPipeline(IntelPipeline):
    """Country IP range and network exploration."""

    kind = PipelineKind.IP_TRACE


def build_pipelines(settings: Settings, gateway: ModelGateway) -> dict[PipelineKind, IntelPipeline]:
    """Create one pipeline per kind sharing a gateway."""
    return {
        cls.kind: cls(settings, gateway)
        for cls in (ScannerPipeline, OsintPipeline, IpExplorerPipeline)
    }

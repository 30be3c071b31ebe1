"""Session orchestrator: routes user actions to pipelines and owns all UI state."""

import asyncio
import logging
import random
from typing import Any

from cforce.config.constants import PAGE_KINDS, ChatRole, LogSeverity, Page, PipelineKind
from cforce.config.message import (
    CHAT_ERROR_FALLBACK,
    ERROR_MESSAGES,
    EXPORT_MESSAGES,
    RUN_DETAIL_MESSAGES,
    RUN_START_MESSAGES,
    RUN_SUCCESS_MESSAGES,
)
from cforce.config.settings import Settings
from cforce.core.exceptions import PipelineError
from cforce.core.models import ChatMessage
from cforce.infrastructure.llm.gateway import ModelGateway
from cforce.infrastructure.logging.run_log import RunLog
from cforce.orchestrator.progress import progress_ramp
from cforce.orchestrator.state import RunState
from cforce.orchestrator.view_model import build_view
from cforce.services.assistant import SecurityAssistant, select_context_snapshot
from cforce.services.export import render_report_pdf, report_filename
from cforce.services.pipelines import IntelPipeline, PipelineResult, build_pipelines

logger = logging.getLogger(__name__)

# Scan and IP trace announce themselves as warnings, OSINT as info.
_START_SEVERITY = {
    PipelineKind.SCAN: LogSeverity.WARNING,
    PipelineKind.OSINT: LogSeverity.INFO,
    PipelineKind.IP_TRACE: LogSeverity.WARNING,
}


class IntelOrchestrator:
    """Orchestrates pipeline runs, synthetic progress, the run log and assistant chat.

    One instance per application session. It is the terminal error boundary:
    no user action raises.
    """

    def __init__(
        self,
        settings: Settings,
        gateway: ModelGateway | None = None,
        pipelines: dict[PipelineKind, IntelPipeline] | None = None,
        assistant: SecurityAssistant | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize orchestrator with settings and optional collaborators."""
        self.settings = settings
        gateway = gateway or ModelGateway(settings)
        self.pipelines = pipelines or build_pipelines(settings, gateway)
        self.assistant = assistant or SecurityAssistant(settings, gateway)
        self._rng = rng or random.Random()

        self.page = Page.SCANNER
        self.runs: dict[PipelineKind, RunState] = {kind: RunState(kind=kind) for kind in PipelineKind}
        self.results: dict[PipelineKind, PipelineResult | None] = {kind: None for kind in PipelineKind}
        # Target of the run that produced each result slot
        self.result_targets: dict[PipelineKind, str | None] = {kind: None for kind in PipelineKind}
        self.log = RunLog(max_entries=settings.log_max_entries)
        self.chat_history: list[ChatMessage] = []
        self.chat_pending = False
        self._tasks: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def select_page(self, page: Page) -> None:
        """Switch the active page. In-flight runs are unaffected."""
        self.page = page

    @property
    def active_kind(self) -> PipelineKind | None:
        return PAGE_KINDS.get(self.page)

    @property
    def progress(self) -> int:
        """Progress of the active page's run (0 on the assistant page)."""
        kind = self.active_kind
        return self.runs[kind].progress if kind else 0

    def is_running(self, kind: PipelineKind) -> bool:
        return self.runs[kind].running

    # ------------------------------------------------------------------
    # Pipeline runs
    # ------------------------------------------------------------------

    def _begin(self, kind: PipelineKind, target: str) -> RunState | None:
        """Validate the action and move the kind to Running, or return None for a no-op."""
        if not target:
            logger.debug("Ignoring %s action with empty target", kind.value)
            return None
        if self.is_running(kind):
            logger.info("Ignoring %s action: a run is already in flight", kind.value)
            return None

        self.log.clear()
        state = RunState(kind=kind)
        state.mark_running(target)
        self.runs[kind] = state

        self.log.add(RUN_START_MESSAGES[kind].format(target=target), _START_SEVERITY[kind])
        if kind in RUN_DETAIL_MESSAGES:
            self.log.add(RUN_DETAIL_MESSAGES[kind])
        return state

    async def _execute(self, state: RunState) -> RunState:
        """Run the pipeline for a Running state and settle it. Never raises."""
        kind = state.kind
        try:
            async with progress_ramp(state, self.settings, self._rng):
                result = await self.pipelines[kind].run(state.target or "")
        except PipelineError as e:
            key = "parse_failure" if e.is_parse_failure else "engine_fatal"
            logger.error(
                "%s run failed: %s (cause: %s)", kind.value, e, type(e.__cause__).__name__
            )
            state.mark_failed(ERROR_MESSAGES[key])
            self.log.add(ERROR_MESSAGES[key], LogSeverity.ERROR)
        except Exception as e:
            logger.error("%s run failed unexpectedly: %s", kind.value, e, exc_info=True)
            state.mark_failed(ERROR_MESSAGES["engine_fatal"])
            self.log.add(ERROR_MESSAGES["engine_fatal"], LogSeverity.ERROR)
        else:
            self.results[kind] = result
            self.result_targets[kind] = state.target
            state.mark_succeeded(result)
            self.log.add(RUN_SUCCESS_MESSAGES[kind], LogSeverity.SUCCESS)

        await asyncio.sleep(self.settings.progress_reset_delay)
        state.progress = 0
        return state

    async def run(self, kind: PipelineKind, target: str) -> RunState | None:
        """
        Run a pipeline to completion.

        Returns:
            The settled RunState, or None when the action was a no-op
            (empty target, or a run of this kind already in flight)
        """
        state = self._begin(kind, target.strip())
        if state is None:
            return None
        return await self._execute(state)

    def start(self, kind: PipelineKind, target: str) -> RunState | None:
        """Start a run in the background and return its Running state, or None for a no-op."""
        state = self._begin(kind, target.strip())
        if state is None:
            return None
        task = asyncio.create_task(self._execute(state), name=f"run-{kind.value}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return state

    async def submit(self, target: str) -> RunState | None:
        """Run the pipeline of the active page. No-op on the assistant page."""
        kind = self.active_kind
        if kind is None:
            return None
        return await self.run(kind, target)

    def view(self, kind: PipelineKind) -> dict[str, Any] | None:
        """View model of the kind's result, hidden while a new run is in flight."""
        result = self.results[kind]
        if result is None or self.is_running(kind):
            return None
        return build_view(kind, result)

    # ------------------------------------------------------------------
    # Assistant
    # ------------------------------------------------------------------

    async def ask(self, query: str) -> ChatMessage | None:
        """
        Send a chat query to the assistant.

        The user turn is appended before dispatch and exactly one assistant
        turn after it, whether the call succeeded or not.

        Returns:
            The appended assistant message, or None for a blank query or while
            another query is pending
        """
        if not query.strip() or self.chat_pending:
            return None

        history = list(self.chat_history)
        self.chat_history.append(ChatMessage(role=ChatRole.USER, content=query))
        self.chat_pending = True
        snapshot = select_context_snapshot(self.results)
        try:
            reply = await self.assistant.ask(query, history, snapshot)
        except Exception as e:
            logger.error("Chat core error: %s", e, exc_info=True)
            reply = CHAT_ERROR_FALLBACK
        finally:
            self.chat_pending = False

        message = ChatMessage(role=ChatRole.ASSISTANT, content=reply)
        self.chat_history.append(message)
        return message

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_report(self, kind: PipelineKind) -> tuple[str, bytes] | None:
        """Render the kind's current view to a PDF. Returns (filename, bytes) or None."""
        view = self.view(kind)
        if view is None:
            return None

        self.log.add(EXPORT_MESSAGES["started"])
        try:
            pdf = render_report_pdf(kind, view)
        except Exception as e:
            logger.error("%s export failed: %s", kind.value, e, exc_info=True)
            self.log.add(ERROR_MESSAGES["export_failed"], LogSeverity.ERROR)
            return None

        self.log.add(EXPORT_MESSAGES["completed"], LogSeverity.SUCCESS)
        return report_filename(self.result_targets[kind] or ""), pdf

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Read-only summary of the session for the presentation layer."""
        return {
            "page": self.page.value,
            "progress": self.progress,
            "runs": {
                kind.value: {
                    "status": state.status.value,
                    "target": state.target,
                    "progress": state.progress,
                    "error": state.error,
                    "has_result": self.results[kind] is not None,
                }
                for kind, state in self.runs.items()
            },
            "log": [
                {"timestamp": e.timestamp, "message": e.message, "severity": e.severity.value}
                for e in self.log.entries()
            ],
            "chat_pending": self.chat_pending,
        }

    async def close(self) -> None:
        """Cancel background runs so no task or timer outlives the session."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Orchestrator closed (%d background runs cancelled)", len(tasks))

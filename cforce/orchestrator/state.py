"""Run state model."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from cforce.config.constants import PipelineKind, RunStatus
from cforce.services.pipelines.models import PipelineResult


@dataclass
class RunState:
    """Lifecycle of the most recent run of one pipeline kind.

    A new run replaces the object, so a settling run only ever writes to its
    own state.
    """

    kind: PipelineKind
    status: RunStatus = RunStatus.IDLE
    target: Optional[str] = None

    # Set only when status is SUCCEEDED
    result: Optional[PipelineResult] = None

    # Set only when status is FAILED (user-facing, no internals)
    error: Optional[str] = None

    # Synthetic progress, 0-100
    progress: int = 0

    started_at: Optional[str] = None
    finished_at: Optional[str] = None

    @property
    def running(self) -> bool:
        return self.status == RunStatus.RUNNING

    def mark_running(self, target: str) -> None:
        self.status = RunStatus.RUNNING
        self.target = target
        self.started_at = datetime.now(timezone.utc).isoformat()

    def mark_succeeded(self, result: PipelineResult) -> None:
        self.status = RunStatus.SUCCEEDED
        self.result = result
        self.finished_at = datetime.now(timezone.utc).isoformat()

    def mark_failed(self, error: str) -> None:
        self.status = RunStatus.FAILED
        self.error = error
        self.finished_at = datetime.now(timezone.utc).isoformat()

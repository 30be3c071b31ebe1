"""Orchestration of pipeline runs, progress, run log and assistant chat."""

from cforce.orchestrator.orchestrator import IntelOrchestrator
from cforce.orchestrator.state import RunState

__all__ = ["IntelOrchestrator", "RunState"]

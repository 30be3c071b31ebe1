"""Prompt builders for the intelligence pipelines and the assistant."""

from collections.abc import Callable

from cforce.config.constants import PipelineKind
from cforce.config.prompts.assistant import (
    ASSISTANT_SYSTEM_INSTRUCTION,
    build_assistant_system_prompt,
)
from cforce.config.prompts.ip_trace import build_ip_trace_prompt
from cforce.config.prompts.osint import build_osint_prompt
from cforce.config.prompts.scan import build_scan_prompt

_BUILDERS: dict[PipelineKind, Callable[[str], str]] = {
    PipelineKind.SCAN: build_scan_prompt,
    PipelineKind.OSINT: build_osint_prompt,
    PipelineKind.IP_TRACE: build_ip_trace_prompt,
}


def build_pipeline_prompt(kind: PipelineKind, target: str) -> str:
    """Build the instruction text for one pipeline kind and target.

    The target is embedded as-is; no escaping or truncation is applied.
    """
    return _BUILDERS[kind](target)


__all__ = [
    "ASSISTANT_SYSTEM_INSTRUCTION",
    "build_assistant_system_prompt",
    "build_ip_trace_prompt",
    "build_osint_prompt",
    "build_pipeline_prompt",
    "build_scan_prompt",
]

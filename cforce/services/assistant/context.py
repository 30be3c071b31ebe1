"""Context snapshot selection for the security assistant."""

import json
from collections.abc import Mapping

from cforce.config.constants import (
    CONTEXT_PRECEDENCE,
    CONTEXT_PREFIX,
    NO_CONTEXT_MARKER,
    PipelineKind,
)
from cforce.services.pipelines.models import PipelineResult, to_payload


def select_context_snapshot(
    results: Mapping[PipelineKind, PipelineResult | None],
) -> PipelineResult | None:
    """Return the first present result in precedence order (Scan, OSINT, IP trace)."""
    for kind in CONTEXT_PRECEDENCE:
        result = results.get(kind)
        if result is not None:
            return result
    return None


def serialize_context(snapshot: PipelineResult | None) -> str:
    """Render a snapshot as the context line of the assistant's final user turn."""
    if snapshot is None:
        return NO_CONTEXT_MARKER
    return CONTEXT_PREFIX + json.dumps(to_payload(snapshot), ensure_ascii=False, default=str)

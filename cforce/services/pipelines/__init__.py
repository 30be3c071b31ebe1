"""Intelligence pipeline services."""

from cforce.services.pipelines.models import (
    RESULT_MODELS,
    IpTraceResult,
    OsintResult,
    PipelineResult,
    ScanResult,
    to_payload,
)
from cforce.services.pipelines.pipeline import (
    IntelPipeline,
    IpExplorerPipeline,
    OsintPipeline,
    ScannerPipeline,
    build_pipelines,
)
from cforce.services.pipelines.validation import parse_result

__all__ = [
    "RESULT_MODELS",
    "IntelPipeline",
    "IpExplorerPipeline",
    "IpTraceResult",
    "OsintPipeline",
    "OsintResult",
    "PipelineResult",
    "ScanResult",
    "ScannerPipeline",
    "build_pipelines",
    "parse_result",
    "to_payload",
]

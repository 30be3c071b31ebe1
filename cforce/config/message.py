"""
User-facing messages for the operator console.
"""
from cforce.config.constants import PipelineKind

# =============================================================================
# Run log messages
# =============================================================================

RUN_START_MESSAGES: dict[PipelineKind, str] = {
    PipelineKind.SCAN: "SCANNER_INIT: Starting Comprehensive Vulnerability Intelligence Scan for {target}",
    PipelineKind.OSINT: "OSINT_INIT: Harvesting Domain Identity Data for {target}",
    PipelineKind.IP_TRACE: "IP_TRACE_INIT: Mapping Full Internet IP Ranges for {target}",
}

RUN_DETAIL_MESSAGES: dict[PipelineKind, str] = {
    PipelineKind.SCAN: "Analyzing Technical Profile & TLS Config...",
}

RUN_SUCCESS_MESSAGES: dict[PipelineKind, str] = {
    PipelineKind.SCAN: "SCAN_COMPLETE: Full Security & Vulnerability Report Generated.",
    PipelineKind.OSINT: "OSINT_SUCCESS: Identity Map compiled.",
    PipelineKind.IP_TRACE: "IP_TRACE_SUCCESS: Comprehensive Network Intelligence Report compiled.",
}

# =============================================================================
# Error messages
# =============================================================================

ERROR_MESSAGES: dict[str, str] = {
    "engine_fatal": "ENGINE_FATAL: Isolated request failed at core. Check API Key or Network.",
    "parse_failure": "PARSE_FAILURE: Engine returned a malformed intelligence report.",
    "export_failed": "Export Error: Critical Failure during rendering.",
}

# =============================================================================
# Export messages
# =============================================================================

EXPORT_MESSAGES: dict[str, str] = {
    "started": "Rendering Document Fragments...",
    "completed": "PDF Document Exported Successfully.",
}

# =============================================================================
# Assistant replies
# =============================================================================

EMPTY_REPLY_FALLBACK = "No response received."
CHAT_ERROR_FALLBACK = "CORE_CHAT_ERROR: Could not establish secure AI connection."

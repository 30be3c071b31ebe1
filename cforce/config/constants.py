"""
Constants, enums, and static values.
"""

from enum import Enum


class PipelineKind(str, Enum):
    """Intelligence pipeline kinds. Each owns one prompt and one result schema."""

    SCAN = "SCAN"
    OSINT = "OSINT"
    IP_TRACE = "IP_TRACE"


class Page(str, Enum):
    """Pages of the operator console."""

    SCANNER = "SCANNER"
    OSINT = "OSINT"
    IP_EXPLORER = "IP_EXPLORER"
    ASSISTANT = "ASSISTANT"


PAGE_KINDS: dict[Page, PipelineKind] = {
    Page.SCANNER: PipelineKind.SCAN,
    Page.OSINT: PipelineKind.OSINT,
    Page.IP_EXPLORER: PipelineKind.IP_TRACE,
}

# Assistant context precedence, first present wins.
CONTEXT_PRECEDENCE: tuple[PipelineKind, ...] = (
    PipelineKind.SCAN,
    PipelineKind.OSINT,
    PipelineKind.IP_TRACE,
)


class RunStatus(str, Enum):
    """Lifecycle status of a pipeline run."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class LogSeverity(str, Enum):
    """Severity of a run log entry."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class ChatRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ResponseFormat(str, Enum):
    """Output format requested from the model."""

    JSON = "json"
    TEXT = "text"


class ModelTool(str, Enum):
    """Capability flags the gateway can enable on a request."""

    WEB_SEARCH = "web_search"


class Severity(str, Enum):
    """Allowed vulnerability severities."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class VulnerabilityType(str, Enum):
    """Allowed vulnerability categories."""

    RCE = "RCE"
    XSS = "XSS"
    SQLI = "SQLi"
    MISCONFIGURATION = "MISCONFIGURATION"
    EXPOSURE = "EXPOSURE"


class AsnType(str, Enum):
    """Allowed ASN ownership types."""

    ISP = "ISP"
    GOVERNMENT = "GOVERNMENT"
    COMMERCIAL = "COMMERCIAL"


PLACEHOLDER = "N/A"
PARSE_EXCERPT_CHARS = 200

PASSIVE_DISCLAIMER = (
    "DISCLAIMER: This is an OSINT-based passive analysis only. No active probing was performed."
)
NETWORK_DISCLAIMER = (
    "DISCLAIMER: This is an OSINT-based passive analysis only. No network probing was performed."
)

NO_CONTEXT_MARKER = "NO_SCAN_CONTEXT_AVAILABLE"
CONTEXT_PREFIX = "CURRENT_SCAN_CONTEXT: "

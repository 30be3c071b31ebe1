"""Request/Response models for API endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from cforce.config.constants import ChatRole, LogSeverity, Page, PipelineKind, RunStatus


def _require_text(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be blank")
    return stripped


class RunRequest(BaseModel):
    """Request to start a pipeline run."""

    target: str = Field(..., description="Domain, IP address or country name")

    @field_validator("target")
    @classmethod
    def target_not_blank(cls, v: str) -> str:
        return _require_text(v)


class PageRequest(BaseModel):
    """Request to switch the active page."""

    page: Page


class ChatRequest(BaseModel):
    """Request model for the assistant endpoint."""

    message: str = Field(..., description="Follow-up question for the security assistant")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        return _require_text(v)


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")


class LogEntryModel(BaseModel):
    timestamp: str
    message: str
    severity: LogSeverity


class RunSummary(BaseModel):
    status: RunStatus
    target: Optional[str] = None
    progress: int = 0
    error: Optional[str] = None
    has_result: bool = False


class SessionResponse(BaseModel):
    """Snapshot of the operator session."""

    page: Page
    progress: int = Field(..., ge=0, le=100)
    runs: dict[PipelineKind, RunSummary]
    log: list[LogEntryModel]
    chat_pending: bool


class PipelineStateResponse(BaseModel):
    """State and rendered view of one pipeline kind."""

    kind: PipelineKind
    status: RunStatus
    target: Optional[str] = None
    progress: int = 0
    error: Optional[str] = None
    view: Optional[dict[str, Any]] = Field(None, description="Display-ready result, absent while running")


class ChatMessageModel(BaseModel):
    role: ChatRole
    content: str


class ChatHistoryResponse(BaseModel):
    messages: list[ChatMessageModel]
    pending: bool

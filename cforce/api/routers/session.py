"""Health and session endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from cforce.api.dependencies import get_orchestrator
from cforce.api.models import HealthResponse, PageRequest, SessionResponse
from cforce.config.settings import Settings, get_settings
from cforce.orchestrator import IntelOrchestrator

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/session", response_model=SessionResponse)
async def get_session(
    orchestrator: IntelOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """Current page, progress, per-kind run status and the run log."""
    return orchestrator.snapshot()


@router.put("/session/page", response_model=SessionResponse)
async def select_page(
    request: PageRequest,
    orchestrator: IntelOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """Switch the active page. Runs in flight keep going."""
    orchestrator.select_page(request.page)
    return orchestrator.snapshot()

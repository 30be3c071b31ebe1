"""Pipeline run, state and report endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from cforce.api.dependencies import get_orchestrator
from cforce.api.models import PipelineStateResponse, RunRequest
from cforce.config.constants import PipelineKind
from cforce.orchestrator import IntelOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


def _state_response(orchestrator: IntelOrchestrator, kind: PipelineKind) -> PipelineStateResponse:
    state = orchestrator.runs[kind]
    return PipelineStateResponse(
        kind=kind,
        status=state.status,
        target=state.target,
        progress=state.progress,
        error=state.error,
        view=orchestrator.view(kind),
    )


@router.post(
    "/{kind}/runs",
    response_model=PipelineStateResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def start_run(
    kind: PipelineKind,
    request: RunRequest,
    orchestrator: IntelOrchestrator = Depends(get_orchestrator),
) -> PipelineStateResponse:
    """Start a run in the background. Poll ``GET /pipelines/{kind}`` for the outcome."""
    state = orchestrator.start(kind, request.target)
    if state is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A {kind.value} run is already in progress",
        )
    return _state_response(orchestrator, kind)


@router.get("/{kind}", response_model=PipelineStateResponse)
async def get_pipeline(
    kind: PipelineKind,
    orchestrator: IntelOrchestrator = Depends(get_orchestrator),
) -> PipelineStateResponse:
    """Run state and rendered result view of one pipeline kind."""
    return _state_response(orchestrator, kind)


@router.get(
    "/{kind}/report",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_report(
    kind: PipelineKind,
    orchestrator: IntelOrchestrator = Depends(get_orchestrator),
) -> Response:
    """Export the current result of a kind as a PDF document."""
    exported = orchestrator.export_report(kind)
    if exported is None:
        raise HTTPException(status_code=404, detail=f"No {kind.value} report available")
    filename, pdf = exported
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

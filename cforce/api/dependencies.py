"""FastAPI dependencies."""

from fastapi import Request

from cforce.orchestrator import IntelOrchestrator


def get_orchestrator(request: Request) -> IntelOrchestrator:
    """Return the session orchestrator created in the app lifespan."""
    return request.app.state.orchestrator

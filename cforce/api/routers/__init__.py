"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from cforce.api.routers.assistant import router as assistant_router
from cforce.api.routers.pipelines import router as pipelines_router
from cforce.api.routers.session import router as session_router

api_router = APIRouter()

api_router.include_router(session_router, tags=["session"])
api_router.include_router(pipelines_router, prefix="/pipelines", tags=["pipelines"])
api_router.include_router(assistant_router, prefix="/assistant", tags=["assistant"])

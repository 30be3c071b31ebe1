"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from cforce.api.routers import api_router
from cforce.config.settings import Settings, get_settings
from cforce.infrastructure.logging.logger import setup_logging
from cforce.orchestrator import IntelOrchestrator

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> None:
    """Validate required configuration at startup."""
    if not settings.gemini_api_key:
        logger.warning("No Gemini API key configured (gemini_api_key); every run will fail")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    logger.info("Starting C-Force Intel Core")
    _validate_startup_config(settings)
    app.state.orchestrator = IntelOrchestrator(settings)

    yield
    logger.info("Shutting down C-Force Intel Core")
    try:
        await app.state.orchestrator.close()
    except Exception as e:
        logger.error("Error closing orchestrator: %s", e, exc_info=True)


app = FastAPI(
    title="C-Force Intel Core",
    description="Passive AI-assisted vulnerability, OSINT and IP-range intelligence",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.include_router(api_router, prefix="/api")

"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from chartgen.api.cors import FixedCORSMiddleware
from chartgen.api.routers import api_router
from chartgen.config.settings import Settings, get_settings
from chartgen.infrastructure.llm.factory import close_shared_credential
from chartgen.infrastructure.logging.logger import setup_logging

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> None:
    """Validate required configuration at startup.

    Raises:
        RuntimeError: If a credential the pipeline cannot run without is missing
    """
    missing = []
    if not (settings.anthropic_api_key or settings.azure_ai_project_endpoint):
        missing.append("anthropic_api_key or azure_ai_project_endpoint")
    if not settings.supabase_url:
        missing.append("supabase_url")
    if not settings.supabase_anon_key:
        missing.append("supabase_anon_key")
    if not settings.supabase_jwt_secret:
        missing.append("supabase_jwt_secret")

    if missing:
        raise RuntimeError(f"Missing required configuration: {', '.join(missing)}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    logger.info("Starting Chartgen service")
    _validate_startup_config(settings)

    yield
    logger.info("Shutting down Chartgen service")
    try:
        await close_shared_credential()
        logger.info("Shared async credential closed")
    except Exception as e:
        logger.error("Error closing shared credential: %s", e, exc_info=True)


app = FastAPI(
    title="Chartgen",
    description="Natural language to chart data over a read-only SQL pipeline",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(FixedCORSMiddleware, allowed_origins=settings.allowed_origins)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.include_router(api_router, prefix="/api")

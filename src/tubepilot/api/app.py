"""FastAPI application for tubepilot."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tubepilot import __version__
from tubepilot.api.routes import process
from tubepilot.core.config.credentials import CredentialStore
from tubepilot.core.logging import configure_logging
from tubepilot.core.models.config import Config
from tubepilot.plugins.platforms.oauth import GoogleTokenRefresher
from tubepilot.runners.pipeline_runner import run_topic

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from tubepilot.runners.pipeline_runner import PipelineRunner

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler."""
    logger.info("Starting tubepilot API", users=len(app.state.credential_store.list_users()))
    yield
    logger.info("Shutting down tubepilot API")


def create_app(
    config: Config | None = None,
    credential_store: CredentialStore | None = None,
    pipeline_runner: PipelineRunner | None = None,
    token_refresher: GoogleTokenRefresher | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        config: Application configuration; loaded from the environment if omitted
        credential_store: Store of signed-in users
        pipeline_runner: Coroutine running one topic; defaults to ``run_topic``
        token_refresher: OAuth refresher used when ``refresh_on_request`` is set

    Returns:
        Configured FastAPI application.
    """
    config = config or Config()
    configure_logging(config.logs)

    app = FastAPI(
        title="tubepilot",
        description="Topic-driven YouTube engagement",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.credential_store = credential_store or CredentialStore(config.storage.credentials_dir)
    app.state.pipeline_runner = pipeline_runner or run_topic
    app.state.token_refresher = token_refresher or GoogleTokenRefresher(config.platform)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_methods=["POST", "GET"],
        allow_headers=["Authorization", "Content-Type", "X-User-Email"],
    )

    app.include_router(process.router, prefix="/api", tags=["process"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    if not config.api.auth_enabled:
        logger.warning("No API key configured (TUBEPILOT_API__KEY), all process requests will be refused")
    logger.info("FastAPI app created", phase_order=config.pipeline.phase_order)
    return app

"""Runs the pipeline for one topic with the YouTube client and Playwright driver."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import structlog

from tubepilot.core.pipeline.orchestrator import PipelineOrchestrator
from tubepilot.plugins.browsers.playwright_plugin import PlaywrightWatchDriver
from tubepilot.plugins.platforms.youtube_api import YouTubeDataClient

if TYPE_CHECKING:
    from tubepilot.core.interfaces.browser import IWatchDriver
    from tubepilot.core.models.config import Config
    from tubepilot.core.models.entities import Credential, PipelineResult, TopicRequest

logger = structlog.get_logger(__name__)

PipelineRunner = Callable[["Credential", "TopicRequest", "Config"], Awaitable["PipelineResult"]]


async def run_topic(
    credential: Credential,
    request: TopicRequest,
    config: Config,
    *,
    driver: IWatchDriver | None = None,
) -> PipelineResult:
    """Run one orchestration for a topic on behalf of a user.

    Args:
        credential: Caller-owned OAuth tokens
        request: Topic to process
        config: Application configuration
        driver: Browser driver override; defaults to Playwright

    Returns:
        Summary of the finished run
    """
    driver = driver or PlaywrightWatchDriver(config.browser)

    async with YouTubeDataClient(credential, config.platform) as platform:
        orchestrator = PipelineOrchestrator(
            platform,
            driver,
            config.pipeline,
            cookies=config.browser.cookies,
        )
        return await orchestrator.run(request)

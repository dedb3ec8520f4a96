"""Pipeline orchestrator.

Sequences the three phases of a run for one topic:

1. Channel phase - subscribe to the top channels for the topic
2. Search phase - fetch high-definition video candidates
3. Engagement phase - engage with each video in search order until the
   cumulative watch budget is spent

``phase_order="videos_first"`` runs the channel phase after engagement
instead. Phases run strictly one after another and videos are processed one
at a time. The orchestrator owns the watch budget; per-action failures are
handled inside the engagement executor and channel subscription, while
search failures and browser launch failures propagate to the caller.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog

from tubepilot.core.models.config import PipelineConfig
from tubepilot.core.models.entities import (
    PipelineResult,
    RunOutcome,
    TopicRequest,
    VideoCandidate,
    WatchBudget,
)
from tubepilot.core.pipeline.channels import subscribe_to_top_channels
from tubepilot.core.pipeline.engagement import EngagementExecutor

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from tubepilot.core.interfaces.browser import IWatchContext, IWatchDriver
    from tubepilot.core.interfaces.platform import IVideoPlatform

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def watch_context(
    driver: IWatchDriver,
    cookies: list[dict[str, Any]] | None = None,
) -> AsyncIterator[IWatchContext]:
    """Hold one browser context, releasing it on every exit path."""
    context = await driver.acquire(cookies)
    try:
        yield context
    finally:
        await driver.release(context)


class PipelineOrchestrator:
    """Runs the engagement pipeline for a topic.

    Usage:
        orchestrator = PipelineOrchestrator(platform, driver, config.pipeline)
        result = await orchestrator.run(TopicRequest(topic="chess"))
    """

    def __init__(
        self,
        platform: IVideoPlatform,
        driver: IWatchDriver,
        config: PipelineConfig | None = None,
        cookies: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize orchestrator.

        Args:
            platform: Authenticated platform client
            driver: Browser automation driver
            config: Pipeline configuration
            cookies: Cookies handed to the driver when the context is acquired
        """
        self.platform = platform
        self.driver = driver
        self.config = config or PipelineConfig()
        self.cookies = cookies or []

    async def run(self, request: TopicRequest) -> PipelineResult:
        """Run all phases for one topic.

        Returns:
            Summary of the run

        Raises:
            Exception: Search or browser acquisition failures
        """
        topic = request.topic
        result = PipelineResult(
            topic=topic,
            outcome=RunOutcome.COMPLETED,
            budget=WatchBudget(limit_ms=self.config.watch_budget_ms),
        )

        logger.info(
            "[PIPELINE] Starting to process videos",
            topic=topic,
            phase_order=self.config.phase_order,
            watch_budget_s=self.config.watch_budget_ms / 1000,
            per_video_cap_s=self.config.per_video_cap_ms / 1000,
        )

        try:
            if self.config.phase_order == "channels_first":
                await self._channel_phase(topic, result)
                await self._video_phases(topic, result)
            else:
                await self._video_phases(topic, result)
                await self._channel_phase(topic, result)
        except Exception as e:
            logger.error("[PIPELINE] Error processing videos", topic=topic, error=str(e))
            raise

        result.finished_at = datetime.now(UTC)
        logger.info(
            "[PIPELINE] Finished processing videos",
            topic=topic,
            outcome=result.outcome.value,
            videos_found=result.videos_found,
            videos_processed=result.videos_processed,
            channels_subscribed=len(result.channels_subscribed),
            watched_s=result.budget.accumulated_ms / 1000,
            duration_s=round(result.duration_s, 2),
        )
        return result

    async def _channel_phase(self, topic: str, result: PipelineResult) -> None:
        result.channels_subscribed = await subscribe_to_top_channels(
            self.platform, topic, self.config.max_channels
        )

    async def _video_phases(self, topic: str, result: PipelineResult) -> None:
        videos = await self.search_videos(topic)
        result.videos_found = len(videos)
        if not videos:
            logger.info("[PIPELINE] No videos found, skipping engagement", topic=topic)
            return
        await self.engage_videos(videos, topic, result)

    async def search_videos(self, topic: str) -> list[VideoCandidate]:
        """Fetch video candidates for a topic in search-result order."""
        logger.info("[PIPELINE] Searching for videos", topic=topic)
        items = await self.platform.search(
            topic,
            kind="video",
            max_results=self.config.max_videos,
            video_definition=self.config.video_definition,
        )
        videos = [VideoCandidate.from_search_item(item) for item in items]
        logger.info("[PIPELINE] Found videos", topic=topic, count=len(videos))
        return videos

    async def engage_videos(
        self,
        videos: list[VideoCandidate],
        topic: str,
        result: PipelineResult,
    ) -> None:
        """Engage with videos in order until the budget is exhausted."""
        budget = result.budget

        async with watch_context(self.driver, self.cookies) as context:
            executor = EngagementExecutor(self.platform, self.driver, context, self.config)

            for index, video in enumerate(videos, start=1):
                logger.info(
                    "[PIPELINE] Processing video",
                    position=f"{index}/{len(videos)}",
                    title=video.title,
                )
                watch_ms = await executor.engage(video, topic)
                budget.add(watch_ms)
                result.videos_processed += 1

                if budget.exhausted:
                    logger.info(
                        "[PIPELINE] Reached total watch time limit",
                        accumulated_s=budget.accumulated_ms / 1000,
                        limit_s=budget.limit_ms / 1000,
                        skipped=len(videos) - index,
                    )
                    result.outcome = RunOutcome.BUDGET_EXHAUSTED
                    break

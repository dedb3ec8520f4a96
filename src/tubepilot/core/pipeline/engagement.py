"""Per-video engagement: watch, like, comment, and file into a playlist.

Each action is attempted independently. A failing like never prevents the
comment, and a failing comment never prevents the playlist insert. Only a
failure while working out how long to watch makes a video count as zero.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from tubepilot.core.models.config import PipelineConfig
from tubepilot.core.models.entities import PlaylistRef, VideoCandidate
from tubepilot.core.pipeline.duration import parse_duration_ms

if TYPE_CHECKING:
    from tubepilot.core.interfaces.browser import IWatchContext, IWatchDriver
    from tubepilot.core.interfaces.platform import IVideoPlatform

logger = structlog.get_logger(__name__)


class EngagementExecutor:
    """Runs the engagement sequence for one video at a time.

    One executor is created per run. Playlists resolved during the run are
    remembered for the rest of that run only.

    Usage:
        executor = EngagementExecutor(platform, driver, context, config)
        watch_ms = await executor.engage(video, "chess")
    """

    def __init__(
        self,
        platform: IVideoPlatform,
        driver: IWatchDriver,
        context: IWatchContext,
        config: PipelineConfig | None = None,
    ) -> None:
        self.platform = platform
        self.driver = driver
        self.context = context
        self.config = config or PipelineConfig()
        self._playlists: dict[str, PlaylistRef] = {}

    async def engage(self, video: VideoCandidate, topic: str) -> int:
        """Engage with one video.

        Args:
            video: Search result to act on
            topic: Topic driving the run

        Returns:
            Milliseconds spent watching, to be charged to the watch budget
        """
        if not video.video_id:
            logger.info("[ENGAGE] Invalid video ID, skipping", title=video.title)
            return 0

        video_id = video.video_id
        logger.info("[ENGAGE] Processing video", video_id=video_id, title=video.title)

        try:
            watch_ms = await self._watch_duration(video_id)
        except Exception as e:
            logger.error(
                "[ENGAGE] Could not determine watch duration",
                video_id=video_id,
                error=str(e),
            )
            return 0

        watched = await self._watch(video_id, watch_ms)
        await self._like(video_id)
        await self._comment(video_id, topic)
        await self._add_to_playlist(video_id, topic)

        if not watched and not self.config.count_failed_watches:
            return 0
        return watch_ms

    async def _watch_duration(self, video_id: str) -> int:
        raw = await self.platform.get_video_duration(video_id)
        full_ms = parse_duration_ms(raw)
        if not full_ms:
            logger.warning("[ENGAGE] No duration found for video", video_id=video_id, raw=raw)
        watch_ms = min(full_ms, self.config.per_video_cap_ms)
        logger.debug(
            "[ENGAGE] Watch duration computed",
            video_id=video_id,
            video_duration_s=full_ms / 1000,
            watch_duration_s=watch_ms / 1000,
        )
        return watch_ms

    async def _watch(self, video_id: str, watch_ms: int) -> bool:
        try:
            return await self.driver.navigate_and_hold(self.context, video_id, watch_ms)
        except Exception as e:
            logger.error("[ENGAGE] Watching the video failed", video_id=video_id, error=str(e))
            return False

    async def _like(self, video_id: str) -> bool:
        try:
            await self.platform.rate_video(video_id, "like")
        except Exception as e:
            logger.error("[ENGAGE] Error liking the video", video_id=video_id, error=str(e))
            return False
        logger.info("[ENGAGE] Video liked", video_id=video_id)
        return True

    async def _comment(self, video_id: str, topic: str) -> bool:
        text = self.config.comment_for(topic)
        try:
            await self.platform.insert_comment(video_id, text)
        except Exception as e:
            logger.error("[ENGAGE] Error posting comment", video_id=video_id, error=str(e))
            return False
        logger.info("[ENGAGE] Comment posted", video_id=video_id, text=text)
        return True

    async def _add_to_playlist(self, video_id: str, topic: str) -> bool:
        playlist = await self.resolve_playlist(topic)
        if not playlist.resolved:
            logger.warning(
                "[ENGAGE] No playlist available, video not added",
                video_id=video_id,
                playlist=playlist.title,
            )
            return False

        try:
            await self.platform.insert_playlist_item(playlist.id, video_id)
        except Exception as e:
            logger.error(
                "[ENGAGE] Error adding video to playlist",
                video_id=video_id,
                playlist_id=playlist.id,
                error=str(e),
            )
            return False
        logger.info("[ENGAGE] Video added to playlist", video_id=video_id, playlist_id=playlist.id)
        return True

    async def resolve_playlist(self, topic: str) -> PlaylistRef:
        """Find the topic playlist among the user's playlists, creating it if absent.

        A listing failure leaves the playlist unresolved rather than creating
        one, since a duplicate could result. Unresolved lookups are retried
        on the next video.
        """
        title = self.config.playlist_title_for(topic)
        cached = self._playlists.get(title)
        if cached is not None:
            return cached

        playlist = PlaylistRef(title=title)

        try:
            items = await self.platform.list_own_playlists()
        except Exception as e:
            logger.error("[ENGAGE] Error listing playlists", playlist=title, error=str(e))
            return playlist

        for item in items:
            if (item.get("snippet") or {}).get("title") == title and item.get("id"):
                playlist.id = item["id"]
                break

        if not playlist.resolved:
            logger.info("[ENGAGE] Creating new playlist", playlist=title)
            try:
                created = await self.platform.create_playlist(
                    title, self.config.playlist_description_for(topic)
                )
            except Exception as e:
                logger.error("[ENGAGE] Error creating playlist", playlist=title, error=str(e))
                return playlist
            playlist.id = created.get("id")
            logger.info("[ENGAGE] Created playlist", playlist=title, playlist_id=playlist.id)

        if playlist.resolved:
            self._playlists[title] = playlist
        return playlist

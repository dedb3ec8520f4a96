"""Video platform client interface definitions."""

from __future__ import annotations

from typing import Any, Literal, Protocol, runtime_checkable

SearchKind = Literal["video", "channel"]


@runtime_checkable
class IVideoPlatform(Protocol):
    """Contract for the remote video platform API.

    Every call may raise on transient network or auth failures; callers
    decide per step whether that is fatal.
    """

    async def search(
        self,
        query: str,
        *,
        kind: SearchKind,
        max_results: int,
        order: str = "relevance",
        video_definition: str | None = None,
    ) -> list[dict[str, Any]]:
        """Search by keyword, returning raw result items."""
        ...

    async def get_video_duration(self, video_id: str) -> str | None:
        """Fetch the encoded duration of a video, if known."""
        ...

    async def rate_video(self, video_id: str, rating: str = "like") -> None:
        """Rate a video."""
        ...

    async def insert_comment(self, video_id: str, text: str) -> dict[str, Any]:
        """Post a top-level comment on a video."""
        ...

    async def list_own_playlists(self) -> list[dict[str, Any]]:
        """List the authenticated user's playlists."""
        ...

    async def create_playlist(self, title: str, description: str) -> dict[str, Any]:
        """Create a playlist owned by the authenticated user."""
        ...

    async def insert_playlist_item(self, playlist_id: str, video_id: str) -> dict[str, Any]:
        """Add a video to a playlist."""
        ...

    async def insert_subscription(self, channel_id: str) -> dict[str, Any]:
        """Subscribe the authenticated user to a channel."""
        ...

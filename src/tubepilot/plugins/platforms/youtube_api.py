"""YouTube Data API v3 client.

Thin async wrapper over the REST endpoints used by the engagement
pipeline. Authenticates with the caller's OAuth access token; token refresh
is the caller's responsibility.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from tubepilot.core.models.config import PlatformConfig

if TYPE_CHECKING:
    from types import TracebackType

    from tubepilot.core.interfaces.platform import SearchKind
    from tubepilot.core.models.entities import Credential

logger = structlog.get_logger(__name__)

PLAYLIST_PAGE_SIZE = 50


def json_object(response: httpx.Response) -> dict[str, Any] | None:
    """Decode a JSON object body, or None for any other body."""
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


class PlatformAPIError(Exception):
    """A platform call failed at the transport or HTTP level."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason

    @classmethod
    def from_response(cls, response: httpx.Response) -> PlatformAPIError:
        """Build an error from a Google API error envelope."""
        message = f"HTTP {response.status_code}"
        reason = None
        error = (json_object(response) or {}).get("error")
        if isinstance(error, dict):
            message = str(error.get("message") or message)
            errors = error.get("errors")
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                reason = errors[0].get("reason")
        elif isinstance(error, str):
            # OAuth-style envelope: {"error": "invalid_grant"}
            reason = error
        return cls(message, status_code=response.status_code, reason=reason)


class YouTubeDataClient:
    """Async YouTube Data API client implementing ``IVideoPlatform``.

    Usage:
        async with YouTubeDataClient(credential) as youtube:
            items = await youtube.search("chess", kind="video", max_results=50)
    """

    def __init__(
        self,
        credential: Credential,
        config: PlatformConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            credential: OAuth tokens of the acting user
            config: API base URL and timeout
            transport: Optional transport override (tests)
        """
        self.config = config or PlatformConfig()
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            headers={
                "Authorization": f"Bearer {credential.access_token}",
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def __aenter__(self) -> YouTubeDataClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error("[YOUTUBE_API] Request failed", method=method, path=path, error=str(e))
            raise PlatformAPIError(f"{method} {path} failed: {e}") from e

        if response.is_error:
            error = PlatformAPIError.from_response(response)
            logger.error(
                "[YOUTUBE_API] Error response",
                method=method,
                path=path,
                status_code=error.status_code,
                reason=error.reason,
            )
            raise error

        if response.status_code == 204 or not response.content:
            return {}
        data = json_object(response)
        if data is None:
            logger.error("[YOUTUBE_API] Malformed response body", method=method, path=path)
            raise PlatformAPIError(
                f"{method} {path} returned a non-object body",
                status_code=response.status_code,
            )
        return data

    async def search(
        self,
        query: str,
        *,
        kind: SearchKind,
        max_results: int,
        order: str = "relevance",
        video_definition: str | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {
            "part": "snippet",
            "q": query,
            "type": kind,
            "maxResults": max_results,
            "order": order,
        }
        if video_definition and kind == "video":
            params["videoDefinition"] = video_definition

        data = await self._request("GET", "/search", params=params)
        items = data.get("items", [])
        logger.debug("[YOUTUBE_API] Search returned", query=query, kind=kind, count=len(items))
        return items

    async def get_video_duration(self, video_id: str) -> str | None:
        data = await self._request(
            "GET",
            "/videos",
            params={"part": "contentDetails", "id": video_id},
        )
        items = data.get("items") or []
        if not items:
            return None
        return (items[0].get("contentDetails") or {}).get("duration")

    async def rate_video(self, video_id: str, rating: str = "like") -> None:
        await self._request("POST", "/videos/rate", params={"id": video_id, "rating": rating})

    async def insert_comment(self, video_id: str, text: str) -> dict[str, Any]:
        body = {
            "snippet": {
                "videoId": video_id,
                "topLevelComment": {"snippet": {"textOriginal": text}},
            }
        }
        return await self._request("POST", "/commentThreads", params={"part": "snippet"}, json=body)

    async def list_own_playlists(self) -> list[dict[str, Any]]:
        playlists: list[dict[str, Any]] = []
        page_token: str | None = None

        while True:
            params: dict[str, Any] = {
                "part": "snippet",
                "mine": "true",
                "maxResults": PLAYLIST_PAGE_SIZE,
            }
            if page_token:
                params["pageToken"] = page_token

            data = await self._request("GET", "/playlists", params=params)
            playlists.extend(data.get("items", []))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return playlists

    async def create_playlist(self, title: str, description: str) -> dict[str, Any]:
        body = {"snippet": {"title": title, "description": description}}
        return await self._request("POST", "/playlists", params={"part": "snippet"}, json=body)

    async def insert_playlist_item(self, playlist_id: str, video_id: str) -> dict[str, Any]:
        body = {
            "snippet": {
                "playlistId": playlist_id,
                "resourceId": {"kind": "youtube#video", "videoId": video_id},
            }
        }
        return await self._request("POST", "/playlistItems", params={"part": "snippet"}, json=body)

    async def insert_subscription(self, channel_id: str) -> dict[str, Any]:
        body = {
            "snippet": {
                "resourceId": {"kind": "youtube#channel", "channelId": channel_id},
            }
        }
        return await self._request("POST", "/subscriptions", params={"part": "snippet"}, json=body)

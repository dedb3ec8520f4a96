"""Global test fixtures for tubepilot."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# Import pytest plugins for real-service tests
from tests.pytest_plugins.markers import (
    pytest_addoption,
    pytest_collection_modifyitems,
    pytest_configure,
)

# Re-export for pytest discovery
__all__ = [
    "pytest_addoption",
    "pytest_collection_modifyitems",
    "pytest_configure",
]

MINUTE_MS = 60 * 1000


# ============================================================================
# SEARCH RESULT BUILDERS
# ============================================================================


def video_item(video_id: str | None, title: str = "") -> dict[str, Any]:
    """Build a raw ``search.list`` video item."""
    item: dict[str, Any] = {
        "kind": "youtube#searchResult",
        "snippet": {"title": title or f"Video {video_id}"},
    }
    item["id"] = {"kind": "youtube#video", "videoId": video_id} if video_id else {}
    return item


def channel_item(channel_id: str | None) -> dict[str, Any]:
    """Build a raw ``search.list`` channel item."""
    snippet = {"channelId": channel_id, "title": f"Channel {channel_id}"} if channel_id else {}
    return {"kind": "youtube#searchResult", "id": {"kind": "youtube#channel"}, "snippet": snippet}


# ============================================================================
# MOCK PLATFORM
# ============================================================================


def configure_search(
    platform: MagicMock,
    videos: list[dict[str, Any]] | None = None,
    channels: list[dict[str, Any]] | None = None,
) -> None:
    """Make ``platform.search`` answer per result kind."""

    async def search(query: str, *, kind: str, max_results: int, **kwargs: Any) -> list[dict[str, Any]]:
        items = videos if kind == "video" else channels
        return list(items or [])[:max_results]

    platform.search = AsyncMock(side_effect=search)


def configure_durations(platform: MagicMock, durations: dict[str, str | None]) -> None:
    """Make ``platform.get_video_duration`` answer per video ID."""

    async def get_video_duration(video_id: str) -> str | None:
        return durations.get(video_id)

    platform.get_video_duration = AsyncMock(side_effect=get_video_duration)


@pytest.fixture
def mock_platform() -> MagicMock:
    """Mock video platform client with every call succeeding."""
    platform = MagicMock()
    platform.search = AsyncMock(return_value=[])
    platform.get_video_duration = AsyncMock(return_value="PT10M")
    platform.rate_video = AsyncMock(return_value=None)
    platform.insert_comment = AsyncMock(return_value={"id": "comment-1"})
    platform.list_own_playlists = AsyncMock(return_value=[])
    platform.create_playlist = AsyncMock(return_value={"id": "PL-new"})
    platform.insert_playlist_item = AsyncMock(return_value={"id": "item-1"})
    platform.insert_subscription = AsyncMock(return_value={"id": "sub-1"})
    return platform


# ============================================================================
# MOCK BROWSER DRIVER
# ============================================================================


class MockWatchContext:
    """Mock browser context handed out by the driver."""

    def __init__(self) -> None:
        self.closed = False

    async def close(self) -> None:
        self.closed = True


class MockWatchDriver:
    """Mock watch driver recording every hold instead of sleeping."""

    def __init__(self, watch_succeeds: bool = True) -> None:
        self.context = MockWatchContext()
        self.watch_succeeds = watch_succeeds
        self.acquire = AsyncMock(side_effect=self._acquire)
        self.navigate_and_hold = AsyncMock(side_effect=self._navigate_and_hold)
        self.release = AsyncMock(side_effect=self._release)
        self.holds: list[tuple[str, int]] = []

    async def _acquire(self, cookies: list[dict[str, Any]] | None = None) -> MockWatchContext:
        return self.context

    async def _navigate_and_hold(self, context: Any, video_id: str, duration_ms: int) -> bool:
        self.holds.append((video_id, duration_ms))
        return self.watch_succeeds

    async def _release(self, context: Any) -> None:
        await context.close()


@pytest.fixture
def mock_driver() -> MockWatchDriver:
    """Create a mock watch driver for testing."""
    return MockWatchDriver()


# ============================================================================
# CONFIG / STORAGE FIXTURES
# ============================================================================


@pytest.fixture
def app_config(tmp_path):
    """Application configuration isolated to a temporary directory."""
    from tubepilot.core.models.config import Config, StorageConfig

    return Config(storage=StorageConfig(credentials_dir=tmp_path / "config"))


@pytest.fixture
def credential_store(app_config):
    """Empty credential store in a temporary directory."""
    from tubepilot.core.config.credentials import CredentialStore

    return CredentialStore(app_config.storage.credentials_dir)

"""Request-scoped data model for one pipeline run.

Nothing here outlives a single orchestration call: candidates are produced
by search and consumed once, the watch budget is owned by the orchestrator
for the duration of the run, and playlist references are re-resolved on
every run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


def mask_token(token: str) -> str:
    """Shorten a secret for log output."""
    if not token:
        return "none"
    return token[:8] + "..."


@dataclass(frozen=True)
class TopicRequest:
    """A single invocation of the pipeline for one topic."""

    topic: str


@dataclass(frozen=True)
class Credential:
    """OAuth tokens for the user the pipeline acts on behalf of.

    Owned by the caller. The pipeline passes it to the platform client
    and never refreshes or mutates it.
    """

    access_token: str
    refresh_token: str

    def __repr__(self) -> str:
        return (
            f"Credential(access_token={mask_token(self.access_token)!r}, "
            f"refresh_token={mask_token(self.refresh_token)!r})"
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.access_token and self.refresh_token)


@dataclass(frozen=True)
class VideoCandidate:
    """A video search result prior to any engagement."""

    video_id: str | None
    title: str = ""

    @classmethod
    def from_search_item(cls, item: dict[str, Any]) -> VideoCandidate:
        """Build a candidate from a raw ``search.list`` item.

        Items without a resolvable ``id.videoId`` produce a candidate whose
        ``video_id`` is None; the engagement step skips those.
        """
        raw_id = item.get("id")
        video_id = raw_id.get("videoId") if isinstance(raw_id, dict) else None
        snippet = item.get("snippet") or {}
        return cls(video_id=video_id or None, title=snippet.get("title") or "")


@dataclass(frozen=True)
class ChannelCandidate:
    """A channel search result prior to subscribing."""

    channel_id: str

    @classmethod
    def from_search_item(cls, item: dict[str, Any]) -> ChannelCandidate | None:
        snippet = item.get("snippet") or {}
        raw_id = item.get("id")
        channel_id = snippet.get("channelId")
        if not channel_id and isinstance(raw_id, dict):
            channel_id = raw_id.get("channelId")
        return cls(channel_id=channel_id) if channel_id else None


@dataclass
class WatchBudget:
    """Cumulative watch-time cap for one run.

    ``accumulated_ms`` only ever grows.
    """

    limit_ms: int
    accumulated_ms: int = 0

    def add(self, watch_ms: int) -> None:
        if watch_ms < 0:
            raise ValueError(f"watch time cannot be negative: {watch_ms}")
        self.accumulated_ms += watch_ms

    @property
    def exhausted(self) -> bool:
        return self.accumulated_ms >= self.limit_ms


@dataclass
class PlaylistRef:
    """A topic playlist, looked up or created lazily within a run."""

    title: str
    id: str | None = None

    @property
    def resolved(self) -> bool:
        return self.id is not None


class RunOutcome(str, Enum):
    """How a run terminated successfully."""

    COMPLETED = "completed"  # all candidates processed
    BUDGET_EXHAUSTED = "budget_exhausted"  # stopped early on the watch budget


@dataclass
class PipelineResult:
    """Summary of a finished run, used for logging and the CLI."""

    topic: str
    outcome: RunOutcome
    budget: WatchBudget
    videos_found: int = 0
    videos_processed: int = 0
    channels_subscribed: list[str] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None

    @property
    def duration_s(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

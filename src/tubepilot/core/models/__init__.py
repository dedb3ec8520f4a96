"""Data models."""

from tubepilot.core.models.config import (
    ApiConfig,
    BrowserConfig,
    Config,
    LogConfig,
    PipelineConfig,
    PlatformConfig,
    StorageConfig,
)
from tubepilot.core.models.entities import (
    ChannelCandidate,
    Credential,
    PipelineResult,
    PlaylistRef,
    RunOutcome,
    TopicRequest,
    VideoCandidate,
    WatchBudget,
)

__all__ = [
    "ApiConfig",
    "BrowserConfig",
    "ChannelCandidate",
    "Config",
    "Credential",
    "LogConfig",
    "PipelineConfig",
    "PipelineResult",
    "PlatformConfig",
    "PlaylistRef",
    "RunOutcome",
    "StorageConfig",
    "TopicRequest",
    "VideoCandidate",
    "WatchBudget",
]

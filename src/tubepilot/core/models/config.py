"""Configuration models using Pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS


class PipelineConfig(BaseModel):
    """Engagement pipeline configuration."""

    # Whether channel subscription runs before or after the video phases
    phase_order: Literal["channels_first", "videos_first"] = "channels_first"

    # Cumulative watch time across all videos in one run
    watch_budget_ms: int = Field(default=30 * HOUR_MS, ge=0)
    # Per-video watch cap
    per_video_cap_ms: int = Field(default=20 * MINUTE_MS, ge=0)
    # Count the intended watch time even when the browser hold failed
    count_failed_watches: bool = True

    # Search
    max_videos: int = Field(default=50, ge=1, le=50)
    video_definition: Literal["any", "high", "standard"] = "high"
    max_channels: int = Field(default=5, ge=0, le=50)

    # Engagement text
    comment_template: str = "Great {topic} video!"
    playlist_title_template: str = "My {topic} Playlist"
    playlist_description_template: str = "A custom playlist for {topic} videos"

    def comment_for(self, topic: str) -> str:
        return self.comment_template.format(topic=topic)

    def playlist_title_for(self, topic: str) -> str:
        return self.playlist_title_template.format(topic=topic)

    def playlist_description_for(self, topic: str) -> str:
        return self.playlist_description_template.format(topic=topic)


class BrowserConfig(BaseModel):
    """Headless browser configuration for the watch driver."""

    headless: bool = True
    executable_path: str | None = None
    args: list[str] = [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
        "--disable-accelerated-2d-canvas",
        "--no-first-run",
        "--no-zygote",
        "--disable-gpu",
    ]
    launch_timeout_ms: float = Field(default=60000, ge=1000)
    navigation_timeout_ms: float = Field(default=60000, ge=1000)
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = "networkidle"
    watch_url_template: str = "https://www.youtube.com/watch?v={video_id}"

    # Session cookies injected into the context at acquisition
    cookies: list[dict[str, Any]] = []
    # Persistent profile directory, wiped before launch and after release
    user_data_dir: Path | None = None

    def watch_url(self, video_id: str) -> str:
        return self.watch_url_template.format(video_id=video_id)


class PlatformConfig(BaseModel):
    """YouTube Data API and OAuth configuration."""

    base_url: str = "https://www.googleapis.com/youtube/v3"
    timeout: float = Field(default=30.0, ge=1.0)

    token_uri: str = "https://oauth2.googleapis.com/token"
    client_id: str = ""
    client_secret: str = ""
    refresh_on_request: bool = False

    @property
    def can_refresh(self) -> bool:
        return bool(self.client_id and self.client_secret)


class ApiConfig(BaseModel):
    """HTTP API configuration."""

    # Shared bearer key; requests are refused while it is unset
    key: str = ""
    cors_origins: list[str] = []

    @property
    def auth_enabled(self) -> bool:
        return bool(self.key)


class StorageConfig(BaseModel):
    """Credential storage configuration."""

    credentials_dir: Path = Path("data/config")


class LogConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    structured: bool = False


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TUBEPILOT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    platform: PlatformConfig = Field(default_factory=PlatformConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logs: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Config:
        """Load configuration from YAML file."""
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open() as f:
            data = yaml.safe_load(f)

        return cls(**data) if data else cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create configuration from dictionary."""
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return self.model_dump(mode="json")

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to YAML file."""
        import yaml

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)

"""Video platform clients."""

from tubepilot.plugins.platforms.oauth import GoogleTokenRefresher
from tubepilot.plugins.platforms.youtube_api import PlatformAPIError, YouTubeDataClient

__all__ = [
    "GoogleTokenRefresher",
    "PlatformAPIError",
    "YouTubeDataClient",
]

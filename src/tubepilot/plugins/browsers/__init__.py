"""Browser automation drivers."""

from tubepilot.plugins.browsers.playwright_plugin import (
    PlaywrightContext,
    PlaywrightEngine,
    PlaywrightPage,
    PlaywrightWatchDriver,
    normalize_cookie,
)

__all__ = [
    "PlaywrightContext",
    "PlaywrightEngine",
    "PlaywrightPage",
    "PlaywrightWatchDriver",
    "normalize_cookie",
]

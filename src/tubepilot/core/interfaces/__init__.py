"""Core interfaces (protocols) for external collaborators."""

from tubepilot.core.interfaces.browser import IWatchContext, IWatchDriver
from tubepilot.core.interfaces.platform import IVideoPlatform, SearchKind

__all__ = [
    "IVideoPlatform",
    "IWatchContext",
    "IWatchDriver",
    "SearchKind",
]

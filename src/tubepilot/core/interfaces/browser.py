"""Browser automation driver interface definitions."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IWatchContext(Protocol):
    """An open browser context held for the engagement phase."""

    async def close(self) -> None:
        """Close the context and its pages."""
        ...


@runtime_checkable
class IWatchDriver(Protocol):
    """Contract for simulating video views in a browser."""

    async def acquire(self, cookies: list[dict[str, Any]] | None = None) -> IWatchContext:
        """Launch a browser and open a context with the given cookies.

        Raises on launch failure.
        """
        ...

    async def navigate_and_hold(
        self,
        context: IWatchContext,
        video_id: str,
        duration_ms: int,
    ) -> bool:
        """Open the watch page and block for ``duration_ms``.

        Swallows its own navigation errors. Returns True when the hold
        completed.
        """
        ...

    async def release(self, context: IWatchContext) -> None:
        """Close the context and the browser."""
        ...

"""Playwright browser engine and the watch driver built on it."""

from __future__ import annotations

import asyncio
import shutil
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import structlog

from tubepilot.core.models.config import BrowserConfig

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

logger = structlog.get_logger(__name__)

SAME_SITE_VALUES = {
    "strict": "Strict",
    "lax": "Lax",
    "none": "None",
    "no_restriction": "None",
}


def normalize_cookie(cookie: dict[str, Any], default_url: str) -> dict[str, Any] | None:
    """Convert an exported browser cookie to Playwright's format.

    Accepts both DevTools-style (``expires``, ``sameSite: "Lax"``) and
    extension-style (``expirationDate``, ``sameSite: "no_restriction"``)
    cookies. Returns None for cookies without a name.
    """
    name = cookie.get("name")
    if not name:
        return None

    normalized: dict[str, Any] = {"name": name, "value": str(cookie.get("value", ""))}

    if cookie.get("domain"):
        normalized["domain"] = cookie["domain"]
        normalized["path"] = cookie.get("path") or "/"
    else:
        normalized["url"] = cookie.get("url") or default_url

    expires = cookie.get("expires", cookie.get("expirationDate"))
    if isinstance(expires, int | float) and expires > 0:
        normalized["expires"] = float(expires)

    if "httpOnly" in cookie:
        normalized["httpOnly"] = bool(cookie["httpOnly"])
    if "secure" in cookie:
        normalized["secure"] = bool(cookie["secure"])

    same_site = SAME_SITE_VALUES.get(str(cookie.get("sameSite", "")).lower())
    if same_site:
        normalized["sameSite"] = same_site

    return normalized


class PlaywrightPage:
    """Wrapper around Playwright page."""

    def __init__(self, page: Any) -> None:
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self._page.set_default_navigation_timeout(timeout)

    async def goto(
        self,
        url: str,
        *,
        wait_until: str = "load",
        timeout: float | None = None,
    ) -> None:
        options: dict[str, Any] = {"wait_until": wait_until}
        if timeout:
            options["timeout"] = timeout
        await self._page.goto(url, **options)

    async def close(self) -> None:
        await self._page.close()


class PlaywrightContext:
    """Wrapper around Playwright browser context."""

    def __init__(self, context: Any) -> None:
        self._context = context

    async def new_page(self) -> PlaywrightPage:
        return PlaywrightPage(await self._context.new_page())

    async def add_cookies(self, cookies: list[dict[str, Any]]) -> None:
        await self._context.add_cookies(cookies)

    async def close(self) -> None:
        await self._context.close()


class PlaywrightEngine:
    """Playwright Chromium engine.

    Launches either a regular browser or, when ``user_data_dir`` is set, a
    persistent context in a freshly wiped profile directory.
    """

    name = "playwright"

    def __init__(self, config: BrowserConfig | None = None) -> None:
        self.config = config or BrowserConfig()
        self._playwright: Any = None
        self._browser: Any = None
        self._persistent_context: Any = None

    def _launch_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "headless": self.config.headless,
            "args": list(self.config.args),
            "timeout": self.config.launch_timeout_ms,
        }
        if self.config.executable_path:
            options["executable_path"] = self.config.executable_path
        return options

    async def launch(self) -> None:
        try:
            from playwright.async_api import async_playwright
        except ImportError:
            logger.error("Playwright not installed. Install with: pip install playwright")
            raise ImportError("Playwright is required but not installed")

        self._playwright = await async_playwright().start()

        try:
            if self.config.user_data_dir:
                _reset_profile_dir(self.config.user_data_dir)
                self._persistent_context = await self._playwright.chromium.launch_persistent_context(
                    str(self.config.user_data_dir), **self._launch_options()
                )
            else:
                self._browser = await self._playwright.chromium.launch(**self._launch_options())
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

        logger.info(
            "Playwright browser launched",
            headless=self.config.headless,
            persistent=self._persistent_context is not None,
        )

    async def new_context(self) -> PlaywrightContext:
        if self._persistent_context is not None:
            return PlaywrightContext(self._persistent_context)
        if not self._browser:
            raise RuntimeError("Browser not launched")
        context = await self._browser.new_context()
        return PlaywrightContext(context)

    async def close(self) -> None:
        if self._persistent_context is not None:
            await self._persistent_context.close()
            self._persistent_context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        if self.config.user_data_dir:
            shutil.rmtree(self.config.user_data_dir, ignore_errors=True)

        logger.info("Playwright browser closed")


def _reset_profile_dir(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


class PlaywrightWatchDriver:
    """Watch driver implementing ``IWatchDriver`` on Playwright.

    One browser and one context are held between ``acquire`` and
    ``release``; each watch opens and closes its own page.

    Usage:
        driver = PlaywrightWatchDriver(config.browser)
        context = await driver.acquire(config.browser.cookies)
        try:
            await driver.navigate_and_hold(context, "dQw4w9WgXcQ", 30_000)
        finally:
            await driver.release(context)
    """

    def __init__(
        self,
        config: BrowserConfig | None = None,
        engine_factory: Callable[[BrowserConfig], PlaywrightEngine] = PlaywrightEngine,
    ) -> None:
        self.config = config or BrowserConfig()
        self._engine_factory = engine_factory
        self._engine: PlaywrightEngine | None = None

    async def acquire(self, cookies: list[dict[str, Any]] | None = None) -> PlaywrightContext:
        """Launch the browser and open the context used for all watches."""
        if self._engine is not None:
            raise RuntimeError("Watch context already acquired")

        engine = self._engine_factory(self.config)
        await engine.launch()
        try:
            context = await engine.new_context()
        except Exception:
            await engine.close()
            raise
        self._engine = engine

        if cookies:
            await self._inject_cookies(context, cookies)
        return context

    async def _inject_cookies(self, context: PlaywrightContext, cookies: list[dict[str, Any]]) -> None:
        parts = urlsplit(self.config.watch_url(""))
        default_url = f"{parts.scheme}://{parts.netloc}"
        normalized = [c for c in (normalize_cookie(c, default_url) for c in cookies) if c]
        try:
            await context.add_cookies(normalized)
            logger.info("[WATCH] Cookies set", count=len(normalized), skipped=len(cookies) - len(normalized))
        except Exception as e:
            logger.error("[WATCH] Error setting cookies", error=str(e))

    async def navigate_and_hold(
        self,
        context: PlaywrightContext,
        video_id: str,
        duration_ms: int,
    ) -> bool:
        """Open the watch page and keep it open for ``duration_ms``.

        Navigation and hold errors are logged and reported as False.
        """
        url = self.config.watch_url(video_id)
        page: PlaywrightPage | None = None
        try:
            page = await context.new_page()
            page.set_default_navigation_timeout(self.config.navigation_timeout_ms)

            logger.info("[WATCH] Navigating to video", url=url)
            await page.goto(url, wait_until=self.config.wait_until)

            logger.info("[WATCH] Watching video", video_id=video_id, duration_s=duration_ms / 1000)
            await asyncio.sleep(duration_ms / 1000)

            logger.info("[WATCH] Finished watching the video", video_id=video_id)
            return True
        except Exception as e:
            logger.error("[WATCH] Error watching video", video_id=video_id, error=str(e))
            return False
        finally:
            if page is not None:
                try:
                    await page.close()
                except Exception as e:
                    logger.warning("[WATCH] Error closing page", video_id=video_id, error=str(e))

    async def release(self, context: PlaywrightContext) -> None:
        """Close the context and the browser."""
        engine, self._engine = self._engine, None
        try:
            await context.close()
        except Exception as e:
            logger.error("[WATCH] Error closing context", error=str(e))
        if engine is not None:
            try:
                await engine.close()
            except Exception as e:
                logger.error("[WATCH] Error closing browser", error=str(e))

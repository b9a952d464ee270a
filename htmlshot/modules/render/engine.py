"""
Browser engine abstraction.

The service talks to the headless browser only through these three
interfaces so the engine can be swapped (or faked in tests):

    BrowserEngine.launch()          -> BrowserSession
    BrowserSession.new_page(vp)     -> BrowserPage
    BrowserSession.close()
    BrowserPage.set_content(...)
    BrowserPage.screenshot(...)     -> bytes

``PlaywrightEngine`` is the production implementation (Chromium).
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from playwright.async_api import Browser, Page, Playwright, async_playwright

from htmlshot.config import Settings
from htmlshot.shared.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Viewport:
    """Page dimensions in CSS pixels plus device scale factor."""
    width: int
    height: int
    device_scale_factor: float


# =============================================================================
# INTERFACES
# =============================================================================

class BrowserPage(ABC):
    """A single tab inside a browser session."""

    @abstractmethod
    async def set_content(self, markup: str, *, wait_until: str, timeout_ms: float) -> None:
        """Load markup as the page document and wait for it to settle."""

    @abstractmethod
    async def screenshot(
        self,
        *,
        image_type: str,
        quality: int | None,
        full_page: bool,
        timeout_ms: float,
    ) -> bytes:
        """Capture the page as encoded image bytes."""


class BrowserSession(ABC):
    """One launched browser instance, owned by a single request."""

    @abstractmethod
    async def new_page(self, viewport: Viewport) -> BrowserPage:
        """Open a page configured with the given viewport."""

    @abstractmethod
    async def close(self) -> None:
        """Shut the browser down and release its process."""


class BrowserEngine(ABC):
    """Factory for browser sessions."""

    @abstractmethod
    async def launch(self) -> BrowserSession:
        """Start a new browser session."""


# =============================================================================
# PLAYWRIGHT
# =============================================================================

class PlaywrightPage(BrowserPage):

    def __init__(self, page: Page) -> None:
        self._page = page

    async def set_content(self, markup: str, *, wait_until: str, timeout_ms: float) -> None:
        await self._page.set_content(markup, wait_until=wait_until, timeout=timeout_ms)

    async def screenshot(
        self,
        *,
        image_type: str,
        quality: int | None,
        full_page: bool,
        timeout_ms: float,
    ) -> bytes:
        screenshot_args: dict[str, Any] = {
            "type": image_type,
            "full_page": full_page,
            "timeout": timeout_ms,
        }
        # Playwright rejects quality for png
        if quality is not None:
            screenshot_args["quality"] = quality

        return await self._page.screenshot(**screenshot_args)


class PlaywrightSession(BrowserSession):

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        ignore_https_errors: bool = True,
        close_timeout_ms: float = 10000,
    ) -> None:
        self._playwright = playwright
        self._browser = browser
        self._ignore_https_errors = ignore_https_errors
        self._close_timeout = close_timeout_ms / 1000

    async def new_page(self, viewport: Viewport) -> BrowserPage:
        # Device scale factor can only be set when the page's context is created
        page = await self._browser.new_page(
            viewport={"width": viewport.width, "height": viewport.height},
            device_scale_factor=viewport.device_scale_factor,
            ignore_https_errors=self._ignore_https_errors,
        )
        return PlaywrightPage(page)

    async def close(self) -> None:
        """Close the browser, then stop the driver; each step is time limited."""
        try:
            await asyncio.wait_for(self._browser.close(), self._close_timeout)
        finally:
            await asyncio.wait_for(self._playwright.stop(), self._close_timeout)


class PlaywrightEngine(BrowserEngine):
    """Launches a fresh headless Chromium per session."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def launch(self) -> BrowserSession:
        settings = self.settings
        playwright = await async_playwright().start()

        try:
            browser = await playwright.chromium.launch(
                headless=settings.headless,
                args=settings.browser_args,
                executable_path=settings.browser_executable_path,
                timeout=settings.launch_timeout_ms,
            )
        except Exception:
            await asyncio.wait_for(playwright.stop(), settings.close_timeout_ms / 1000)
            raise

        logger.debug(f"Launched Chromium {browser.version}")
        return PlaywrightSession(
            playwright,
            browser,
            ignore_https_errors=settings.ignore_https_errors,
            close_timeout_ms=settings.close_timeout_ms,
        )

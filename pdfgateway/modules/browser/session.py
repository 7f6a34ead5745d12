"""
Browser session manager - owns the headless Chromium lifecycle.

Two modes:
- shared: one browser per process, launched lazily on first use and closed on
  shutdown. Concurrent requests open their own pages in it.
- isolated: a fresh browser per call, always closed when the caller is done.
"""

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from playwright.async_api import Browser, Playwright, async_playwright

from pdfgateway.config import Settings
from pdfgateway.shared.errors import LaunchError
from pdfgateway.shared.logging import get_logger

logger = get_logger(__name__)


# Sandboxing is unavailable in the container runtime; GPU is never present.
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-first-run",
]


class BrowserSessionManager:
    """Lazily launches, shares and shuts down the Chromium process."""

    def __init__(
        self,
        headless: bool = True,
        executable_path: str | None = None,
        launch_args: list[str] | None = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ):
        self.headless = headless
        self.executable_path = executable_path
        self.launch_args = list(launch_args) if launch_args is not None else list(LAUNCH_ARGS)
        self._playwright_factory = playwright_factory

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()
        self._closed = False
        self.launch_count = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "BrowserSessionManager":
        return cls(
            headless=settings.browser_headless,
            executable_path=settings.chrome_executable_path,
        )

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    @property
    def is_closed(self) -> bool:
        return self._closed

    def launch_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "headless": self.headless,
            "args": self.launch_args,
        }
        if self.executable_path:
            options["executable_path"] = self.executable_path
        return options

    def status(self) -> dict[str, Any]:
        return {
            "running": self.is_running,
            "closed": self._closed,
            "launch_count": self.launch_count,
        }

    # =========================================================================
    # SHARED BROWSER
    # =========================================================================

    async def get_browser(self) -> Browser:
        """
        Return the shared browser, launching it on first use.

        Raises:
            LaunchError: the browser could not be started, or the manager has
                already been shut down.
        """
        browser = self._browser
        if browser is not None:
            return browser

        async with self._lock:
            if self._closed:
                raise LaunchError("Browser session is shut down")
            if self._browser is None:
                if self._playwright is None:
                    self._playwright = await self._start_playwright()
                self._browser = await self._launch(self._playwright)
            return self._browser

    async def shutdown(self) -> None:
        """Close the shared browser and stop Playwright. Idempotent."""
        async with self._lock:
            if self._closed:
                return
            self._closed = True
            browser, self._browser = self._browser, None
            playwright, self._playwright = self._playwright, None

        if browser is not None:
            logger.info("Closing shared browser")
            try:
                await browser.close()
            except Exception as e:
                logger.warning(f"Browser close failed during shutdown: {e}")

        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                logger.warning(f"Playwright stop failed during shutdown: {e}")

    # =========================================================================
    # ISOLATED BROWSER
    # =========================================================================

    @asynccontextmanager
    async def isolated_browser(self) -> AsyncIterator[Browser]:
        """Launch a browser for a single unit of work and always close it."""
        playwright = await self._start_playwright()
        try:
            browser = await self._launch(playwright)
            try:
                yield browser
            finally:
                try:
                    await browser.close()
                except Exception as e:
                    logger.warning(f"Isolated browser close failed: {e}")
        finally:
            try:
                await playwright.stop()
            except Exception as e:
                logger.warning(f"Playwright stop failed: {e}")

    # =========================================================================
    # INTERNALS
    # =========================================================================

    async def _start_playwright(self) -> Playwright:
        try:
            return await self._playwright_factory().start()
        except Exception as e:
            logger.error(f"Playwright failed to start: {e}")
            raise LaunchError("Failed to launch browser", details=str(e)) from e

    async def _launch(self, playwright: Playwright) -> Browser:
        logger.info(f"Launching Chromium (headless={self.headless})")
        try:
            browser = await playwright.chromium.launch(**self.launch_options())
        except Exception as e:
            logger.error(f"Chromium launch failed: {e}")
            raise LaunchError("Failed to launch browser", details=str(e)) from e

        self.launch_count += 1
        return browser


def get_browser_manager(request: Request) -> BrowserSessionManager:
    """Dependency: the app's browser session manager."""
    return request.app.state.browser_manager

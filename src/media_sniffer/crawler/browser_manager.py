"""
Browser Manager - Media Sniffer

Manages the single Playwright browser instance shared by all parse requests
and hands out isolated page contexts.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright

from ..config import BROWSER_HEADLESS, BROWSER_NO_SANDBOX, CHROME_PATH

logger = logging.getLogger(__name__)

LAUNCH_ARGS = [
    '--disable-dev-shm-usage',  # Reduce RAM
    '--disable-accelerated-2d-canvas',
    '--disable-gpu',
    '--no-first-run',
    '--disable-extensions',
]

NO_SANDBOX_ARGS = [
    '--no-sandbox',  # If running as root / in containers
    '--disable-setuid-sandbox',
]


class BrowserLaunchError(RuntimeError):
    """Raised when the browser process cannot be started."""
    pass


class BrowserNotInitializedError(RuntimeError):
    """Raised when a page is requested before init()."""

    def __init__(self, message: str = "Browser not initialized"):
        super().__init__(message)


class BrowserManager:
    """
    Browser Manager - Playwright Integration

    Single browser instance, one fresh context per page so concurrent
    parses never share cookies, routes or listeners.
    """

    def __init__(
        self,
        headless: bool = BROWSER_HEADLESS,
        no_sandbox: bool = BROWSER_NO_SANDBOX,
        executable_path: Optional[str] = CHROME_PATH
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run Chromium without a window
            no_sandbox: Disable the Chromium sandbox (restricted environments)
            executable_path: Custom Chromium/Chrome binary, None for Playwright's bundled one
        """
        self.headless = headless
        self.no_sandbox = no_sandbox
        self.executable_path = executable_path
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self._lock: Optional[asyncio.Lock] = None

    @property
    def is_initialized(self) -> bool:
        return self.browser is not None

    def launch_args(self) -> List[str]:
        """Chromium command line flags."""
        args = list(LAUNCH_ARGS)
        if self.no_sandbox:
            args = NO_SANDBOX_ARGS + args
        return args

    async def init(self):
        """Launch browser once and reuse."""
        # Created here so it binds to the running loop
        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            if self.browser is not None:
                return

            try:
                self.playwright = await async_playwright().start()
                self.browser = await self.playwright.chromium.launch(
                    headless=self.headless,
                    args=self.launch_args(),
                    executable_path=self.executable_path
                )
                logger.info("Playwright browser launched")

            except Exception as e:
                logger.error(f"Failed to launch browser: {e}")
                await self._stop_playwright()
                raise BrowserLaunchError(f"Browser launch failed: {str(e)}") from e

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[Page]:
        """
        Open a page in a fresh, isolated browser context.

        The context is closed when the block exits, whatever the outcome.

        Raises:
            BrowserNotInitializedError: init() has not succeeded
        """
        if self.browser is None:
            raise BrowserNotInitializedError()

        context = await self.browser.new_context()
        try:
            page = await context.new_page()
            yield page
        finally:
            try:
                await context.close()
            except Exception as e:
                logger.warning(f"Error closing context: {e}")

    async def close(self):
        """Close browser and stop Playwright."""
        if self.browser:
            try:
                await self.browser.close()
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
            finally:
                self.browser = None

        await self._stop_playwright()
        logger.info("Browser cleanup complete")

    async def _stop_playwright(self):
        if self.playwright:
            try:
                await self.playwright.stop()
            except Exception as e:
                logger.warning(f"Error stopping playwright: {e}")
            finally:
                self.playwright = None

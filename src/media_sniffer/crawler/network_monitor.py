"""
Network Monitor - Media Sniffer

Network-interception strategy: block noisy sub-resources, watch every
response, and keep the ones that are real audio/video files.
"""

import asyncio
import logging
from typing import List

from .browser_manager import BrowserManager
from .media_probe import filename_from_url, format_size, parse_content_length
from .models import MIN_RESOURCE_SIZE, MediaResource
from ..config import BROWSER_TIMEOUT, GRACE_PERIOD

logger = logging.getLogger(__name__)

BLOCKED_RESOURCE_TYPES = ('image', 'stylesheet', 'font')
MEDIA_CONTENT_TYPES = ('video/', 'audio/')


class NetworkMonitor:
    """
    Network Monitor - Media Capture

    Collects media responses for one page. Playwright delivers a page's
    events sequentially, so no locking is needed.
    """

    def __init__(self, min_size: int = MIN_RESOURCE_SIZE):
        """Initialize network monitor."""
        self.min_size = min_size
        self.resources: List[MediaResource] = []

    async def block_noise(self, route):
        """Route handler: abort images, stylesheets and fonts, let the rest through."""
        if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
            await route.abort()
        else:
            await route.continue_()

    def on_response(self, response):
        """
        Playwright response handler.

        Args:
            response: Playwright response object
        """
        content_type = response.headers.get('content-type', '')
        if not any(media in content_type for media in MEDIA_CONTENT_TYPES):
            return

        size = parse_content_length(response.headers.get('content-length'))
        if size is None or size < self.min_size:
            logger.debug(f"Skipping small or unsized media: {response.url[:80]}")
            return

        self.resources.append(MediaResource(
            filename=filename_from_url(response.url),
            type=content_type,
            url=response.url,
            size=format_size(size)
        ))
        logger.debug(f"Captured media URL: {response.url[:80]}")

    def get_resources(self) -> List[MediaResource]:
        """Return captured resources in arrival order."""
        return self.resources.copy()


class NetworkStrategy:
    """Find media by observing the page's network traffic."""

    name = 'network'

    def __init__(
        self,
        browser_manager: BrowserManager,
        timeout: int = BROWSER_TIMEOUT,
        grace_period: float = GRACE_PERIOD
    ):
        """
        Initialize strategy.

        Args:
            browser_manager: Shared browser session
            timeout: Navigation timeout in milliseconds
            grace_period: Seconds to keep listening after DOM ready
        """
        self.browser = browser_manager
        self.timeout = timeout
        self.grace_period = grace_period

    async def find(self, url: str) -> List[MediaResource]:
        """
        Load the page and capture media responses.

        Args:
            url: Page URL

        Returns:
            Media resources seen on the wire (may be empty)

        Raises:
            playwright.async_api.TimeoutError: page did not reach DOM ready in time
        """
        monitor = NetworkMonitor()

        async with self.browser.open_page() as page:
            await page.route('**/*', monitor.block_noise)
            page.on('response', monitor.on_response)

            logger.info(f"Navigating to: {url}")
            await page.goto(url, wait_until='domcontentloaded', timeout=self.timeout)

            # Deferred players often request media after DOM ready
            await asyncio.sleep(self.grace_period)

            resources = monitor.get_resources()

        logger.info(f"Network capture found {len(resources)} media resources on {url}")
        return resources

"""
DOM Scanner - Media Sniffer

Fallback strategy: read media URLs out of the rendered page (<video>,
<audio>, <source> elements and inline scripts) and keep the ones a HEAD
probe confirms are full-size files.
"""

import asyncio
import logging
import re
from dataclasses import replace
from typing import Dict, List, Optional

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .browser_manager import BrowserManager
from .media_probe import MediaProber, filename_from_url
from .models import MediaResource, UNKNOWN_SIZE
from ..config import BROWSER_TIMEOUT, MEDIA_WAIT_TIMEOUT

logger = logging.getLogger(__name__)

# Element .src is already resolved to an absolute URL by the browser
COLLECT_MEDIA_JS = """
() => ({
    videos: Array.from(document.querySelectorAll('video')).map(v => v.src),
    audios: Array.from(document.querySelectorAll('audio')).map(a => a.src),
    sources: Array.from(document.querySelectorAll('source')).map(s => ({src: s.src, type: s.type})),
    scripts: Array.from(document.getElementsByTagName('script')).map(s => s.textContent || '')
})
"""

# Quoted absolute URL ending in one of three extensions (query string allowed).
# Only the first match in each script block is used. The type is audio only
# when the whole URL ends in .mp3.
SCRIPT_MEDIA_URL = re.compile(r'"(http[^"]+\.(mp4|m3u8|mp3)[^"]*)"')

DEFAULT_VIDEO_TYPE = 'video/mp4'
DEFAULT_AUDIO_TYPE = 'audio/mpeg'
UNKNOWN_TYPE = 'unknown'


def find_script_media_url(script: str) -> Optional[MediaResource]:
    """
    Scan one inline script for a hardcoded media URL.

    Args:
        script: Script text content

    Returns:
        Unsized candidate for the first match, or None
    """
    match = SCRIPT_MEDIA_URL.search(script)
    if not match:
        return None

    url = match.group(1)
    return MediaResource(
        filename=filename_from_url(url),
        type=DEFAULT_AUDIO_TYPE if url.endswith('.mp3') else DEFAULT_VIDEO_TYPE,
        url=url,
        size=UNKNOWN_SIZE
    )


class DomScanner:
    """Turn the collected page data into unsized media candidates."""

    def candidates(self, page_data: Dict) -> List[MediaResource]:
        """
        Build candidates from the output of COLLECT_MEDIA_JS.

        Args:
            page_data: Dict with 'videos', 'audios', 'sources' and 'scripts'

        Returns:
            Candidates in document order per category
        """
        found = []

        for src in page_data.get('videos', []):
            if src:
                found.append(self._candidate(src, DEFAULT_VIDEO_TYPE))

        for src in page_data.get('audios', []):
            if src:
                found.append(self._candidate(src, DEFAULT_AUDIO_TYPE))

        for source in page_data.get('sources', []):
            if source.get('src'):
                found.append(self._candidate(source['src'], source.get('type') or UNKNOWN_TYPE))

        for script in page_data.get('scripts', []):
            resource = find_script_media_url(script)
            if resource:
                found.append(resource)

        return found

    def _candidate(self, url: str, media_type: str) -> MediaResource:
        return MediaResource(
            filename=filename_from_url(url),
            type=media_type,
            url=url,
            size=UNKNOWN_SIZE
        )


class DomFallbackStrategy:
    """Find media by inspecting the rendered page."""

    name = 'dom'

    def __init__(
        self,
        browser_manager: BrowserManager,
        prober: Optional[MediaProber] = None,
        timeout: int = BROWSER_TIMEOUT,
        media_wait_timeout: int = MEDIA_WAIT_TIMEOUT
    ):
        """
        Initialize strategy.

        Args:
            browser_manager: Shared browser session
            prober: HEAD prober used to validate and size candidates
            timeout: Navigation timeout in milliseconds
            media_wait_timeout: How long to wait for a <video>/<audio> element (ms)
        """
        self.browser = browser_manager
        self.prober = prober or MediaProber()
        self.scanner = DomScanner()
        self.timeout = timeout
        self.media_wait_timeout = media_wait_timeout

    async def find(self, url: str) -> List[MediaResource]:
        """
        Load the page, collect candidates, and keep the validated ones.

        Args:
            url: Page URL

        Returns:
            Validated, sized media resources (may be empty)

        Raises:
            playwright.async_api.TimeoutError: page did not reach DOM ready in time
        """
        async with self.browser.open_page() as page:
            await page.goto(url, wait_until='domcontentloaded', timeout=self.timeout)
            await self._wait_for_media_element(page)

            page_data = await page.evaluate(COLLECT_MEDIA_JS)
            candidates = self.scanner.candidates(page_data)
            logger.info(f"Found {len(candidates)} candidates in page DOM")

            resources = await self._validate(candidates)

        logger.info(f"DOM fallback kept {len(resources)} media resources on {url}")
        return resources

    async def _wait_for_media_element(self, page):
        try:
            await page.wait_for_selector('video, audio', timeout=self.media_wait_timeout)
        except PlaywrightTimeoutError:
            logger.debug("No <video>/<audio> element appeared, scanning anyway")

    async def _validate(self, candidates: List[MediaResource]) -> List[MediaResource]:
        """Probe every candidate concurrently, keep order, drop the invalid ones."""
        checked = await asyncio.gather(*(self._check(c) for c in candidates))
        return [resource for resource in checked if resource is not None]

    async def _check(self, candidate: MediaResource) -> Optional[MediaResource]:
        if not await self.prober.is_valid(candidate.url):
            logger.debug(f"Rejected candidate: {candidate.url[:80]}")
            return None

        size = await self.prober.get_size(candidate.url)
        return replace(candidate, size=size)

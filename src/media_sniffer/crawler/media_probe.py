"""
Media Probe - Media Sniffer

HEAD-only probing of candidate media URLs: declared size, validity check,
and display filename/size helpers.
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import urlparse

import aiohttp

from .models import MIN_RESOURCE_SIZE, UNKNOWN_FILENAME, UNKNOWN_SIZE

logger = logging.getLogger(__name__)


def filename_from_url(url: str) -> str:
    """
    Derive a display filename from the last segment of a URL path.

    Args:
        url: Absolute resource URL

    Returns:
        Last path segment, or 'unknown' when the URL has none or is malformed
    """
    try:
        path = urlparse(url).path
    except (TypeError, ValueError):
        return UNKNOWN_FILENAME

    return path.split('/')[-1] or UNKNOWN_FILENAME


def format_size(num_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals, e.g. '5.00 MB'."""
    return f"{num_bytes / (1024 * 1024):.2f} MB"


def parse_content_length(value: Optional[str]) -> Optional[int]:
    """Parse a Content-Length header value, None when absent or garbage."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class MediaProber:
    """
    Media Prober - Size Estimation

    Learn a resource's declared size without downloading its body.
    Probes use aiohttp's default client timeout.
    """

    def __init__(self, min_size: int = MIN_RESOURCE_SIZE):
        """
        Initialize prober.

        Args:
            min_size: Minimum declared size (bytes) for a resource to count as media
        """
        self.min_size = min_size

    async def content_length(self, url: str) -> Optional[int]:
        """
        Send a HEAD request and read the declared Content-Length.

        Args:
            url: Resource URL to probe

        Returns:
            Declared size in bytes, or None if the probe failed or the header is missing
        """
        try:
            async with aiohttp.ClientSession() as session:
                async with session.head(url, allow_redirects=True) as response:
                    response.raise_for_status()
                    return parse_content_length(response.headers.get('Content-Length'))

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.debug(f"Probe failed for {url[:80]}: {e}")
            return None

    async def is_valid(self, url: str) -> bool:
        """Check that a resource declares at least min_size bytes."""
        size = await self.content_length(url)
        if size is None:
            return False
        return size >= self.min_size

    async def get_size(self, url: str) -> str:
        """
        Get human readable size of a resource.

        Args:
            url: Resource URL to probe

        Returns:
            Size like '2.00 MB', or 'Unknown'
        """
        size = await self.content_length(url)
        if size is None:
            return UNKNOWN_SIZE
        return format_size(size)

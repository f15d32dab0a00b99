"""
Media Parser - Media Sniffer

Runs the discovery strategies in order: network capture first, DOM scan
only when the network saw nothing.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .browser_manager import BrowserManager
from .dom_scanner import DomFallbackStrategy
from .media_probe import MediaProber
from .models import MediaResource
from .network_monitor import NetworkStrategy

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when a page could not be parsed."""
    pass


async def first_non_empty(strategies: Sequence, url: str) -> List[MediaResource]:
    """
    Run strategies in order until one finds something.

    An empty result moves on to the next strategy. An exception stops the
    chain: a failing strategy never falls back.

    Args:
        strategies: Objects with a ``name`` and an async ``find(url)``
        url: Page URL

    Returns:
        First non-empty result, or the last (empty) one
    """
    resources: List[MediaResource] = []

    for strategy in strategies:
        resources = await strategy.find(url)
        if resources:
            logger.info(f"Strategy '{strategy.name}' found {len(resources)} resources")
            return resources

        logger.info(f"Strategy '{strategy.name}' found nothing on {url}")

    return resources


class MediaParser:
    """
    Media Parser - Page to Media Resources

    Entry point used by the HTTP layer. The browser session is passed in
    and owned by the caller.
    """

    def __init__(self, browser_manager: BrowserManager, strategies: Optional[Sequence] = None):
        """
        Initialize parser.

        Args:
            browser_manager: Shared browser session
            strategies: Ordered strategies, defaults to network then DOM
        """
        self.browser = browser_manager
        if strategies is None:
            strategies = [
                NetworkStrategy(browser_manager),
                DomFallbackStrategy(browser_manager, prober=MediaProber()),
            ]
        self.strategies = list(strategies)

    async def parse(self, url: str) -> Dict[str, List[MediaResource]]:
        """
        Find media resources on a page.

        Args:
            url: Page URL (not pre-validated; bad URLs fail at navigation)

        Returns:
            {'data': [MediaResource, ...]}, possibly empty

        Raises:
            ParseError: a strategy failed (navigation timeout, browser not initialized, ...)
        """
        try:
            resources = await first_non_empty(self.strategies, url)
        except Exception as e:
            logger.error(f"Failed to parse {url}: {e}", exc_info=True)
            raise ParseError(f"Failed to parse {url}: {str(e)}") from e

        return {'data': resources}

"""
Pytest configuration for Media Sniffer tests.
"""

import os
import sys
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, Mock

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest


class FakeBrowser:
    """Stands in for BrowserManager: hands out one mocked page, counts closes."""

    def __init__(self, page):
        self.page = page
        self.opened = 0
        self.closed = 0

    @asynccontextmanager
    async def open_page(self):
        self.opened += 1
        try:
            yield self.page
        finally:
            self.closed += 1


def make_response(url, content_type='', content_length=None):
    """Create a mock Playwright response (header names are lower-case)."""
    headers = {}
    if content_type:
        headers['content-type'] = content_type
    if content_length is not None:
        headers['content-length'] = str(content_length)

    response = Mock()
    response.url = url
    response.headers = headers
    return response


@pytest.fixture
def mock_page():
    """
    Create mock Playwright page.

    Responses listed in ``page.responses_on_goto`` are fed to the registered
    'response' handlers while goto() runs.
    """
    page = Mock()
    page.handlers = {}
    page.responses_on_goto = []

    def on(event, handler):
        page.handlers.setdefault(event, []).append(handler)

    async def goto(url, **kwargs):
        for response in page.responses_on_goto:
            for handler in page.handlers.get('response', []):
                handler(response)

    page.on = Mock(side_effect=on)
    page.route = AsyncMock()
    page.goto = AsyncMock(side_effect=goto)
    page.wait_for_selector = AsyncMock()
    page.evaluate = AsyncMock(return_value={'videos': [], 'audios': [], 'sources': [], 'scripts': []})
    return page


@pytest.fixture
def fake_browser(mock_page):
    """Create fake browser session around the mock page."""
    return FakeBrowser(mock_page)

"""
Tests for the parse orchestrator.
"""

import pytest
from unittest.mock import AsyncMock, Mock

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from media_sniffer.crawler.browser_manager import BrowserManager, BrowserNotInitializedError
from media_sniffer.crawler.dom_scanner import DomFallbackStrategy
from media_sniffer.crawler.media_parser import MediaParser, ParseError, first_non_empty
from media_sniffer.crawler.models import MediaResource
from media_sniffer.crawler.network_monitor import NetworkStrategy

VIDEO = MediaResource('a.mp4', 'video/mp4', 'https://x/a.mp4', '5.00 MB')
AUDIO = MediaResource('b.mp3', 'audio/mpeg', 'https://x/b.mp3', '2.00 MB')


def make_strategy(name, result=None, error=None):
    """Create mock strategy."""
    strategy = Mock()
    strategy.name = name
    if error is not None:
        strategy.find = AsyncMock(side_effect=error)
    else:
        strategy.find = AsyncMock(return_value=result or [])
    return strategy


class TestFirstNonEmpty:
    """Test cases for the strategy combinator."""

    @pytest.mark.asyncio
    async def test_stops_at_first_hit(self):
        first = make_strategy('network', [VIDEO])
        second = make_strategy('dom', [AUDIO])

        assert await first_non_empty([first, second], 'https://x') == [VIDEO]
        second.find.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_moves_on(self):
        first = make_strategy('network', [])
        second = make_strategy('dom', [AUDIO])

        assert await first_non_empty([first, second], 'https://x') == [AUDIO]
        first.find.assert_awaited_once_with('https://x')
        second.find.assert_awaited_once_with('https://x')

    @pytest.mark.asyncio
    async def test_all_empty(self):
        strategies = [make_strategy('network'), make_strategy('dom')]

        assert await first_non_empty(strategies, 'https://x') == []

    @pytest.mark.asyncio
    async def test_no_strategies(self):
        assert await first_non_empty([], 'https://x') == []

    @pytest.mark.asyncio
    async def test_failure_does_not_fall_back(self):
        first = make_strategy('network', error=PlaywrightTimeoutError('Timeout 30000ms exceeded'))
        second = make_strategy('dom', [AUDIO])

        with pytest.raises(PlaywrightTimeoutError):
            await first_non_empty([first, second], 'https://x')

        second.find.assert_not_awaited()


class TestMediaParser:
    """Test cases for MediaParser."""

    def test_default_strategy_order(self):
        parser = MediaParser(Mock())

        assert isinstance(parser.strategies[0], NetworkStrategy)
        assert isinstance(parser.strategies[1], DomFallbackStrategy)
        assert len(parser.strategies) == 2

    @pytest.mark.asyncio
    async def test_primary_result_wrapped(self):
        network = make_strategy('network', [VIDEO])
        dom = make_strategy('dom', [AUDIO])
        parser = MediaParser(Mock(), strategies=[network, dom])

        assert await parser.parse('https://x') == {'data': [VIDEO]}
        dom.find.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fallback_result_wrapped(self):
        parser = MediaParser(Mock(), strategies=[make_strategy('network'), make_strategy('dom', [AUDIO])])

        assert await parser.parse('https://x') == {'data': [AUDIO]}

    @pytest.mark.asyncio
    async def test_nothing_found(self):
        parser = MediaParser(Mock(), strategies=[make_strategy('network'), make_strategy('dom')])

        assert await parser.parse('https://x') == {'data': []}

    @pytest.mark.asyncio
    async def test_primary_failure_raises_parse_error(self):
        timeout = PlaywrightTimeoutError('Timeout 30000ms exceeded')
        dom = make_strategy('dom', [AUDIO])
        parser = MediaParser(Mock(), strategies=[make_strategy('network', error=timeout), dom])

        with pytest.raises(ParseError) as exc_info:
            await parser.parse('https://unreachable.example')

        assert exc_info.value.__cause__ is timeout
        dom.find.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fallback_failure_raises_parse_error(self):
        parser = MediaParser(Mock(), strategies=[
            make_strategy('network'),
            make_strategy('dom', error=PlaywrightTimeoutError('Timeout 30000ms exceeded')),
        ])

        with pytest.raises(ParseError):
            await parser.parse('https://x')

    @pytest.mark.asyncio
    async def test_browser_not_initialized(self):
        parser = MediaParser(BrowserManager(executable_path=None))

        with pytest.raises(ParseError) as exc_info:
            await parser.parse('https://x')

        assert isinstance(exc_info.value.__cause__, BrowserNotInitializedError)
        assert str(exc_info.value.__cause__) == 'Browser not initialized'

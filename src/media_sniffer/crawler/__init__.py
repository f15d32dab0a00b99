"""
Crawler - Media Sniffer

Browser-driven media discovery.
"""

from .browser_manager import BrowserManager, BrowserLaunchError, BrowserNotInitializedError
from .dom_scanner import DomFallbackStrategy, DomScanner
from .media_parser import MediaParser, ParseError, first_non_empty
from .media_probe import MediaProber, filename_from_url, format_size
from .models import MediaResource, MIN_RESOURCE_SIZE
from .network_monitor import NetworkMonitor, NetworkStrategy

__all__ = [
    'BrowserManager',
    'BrowserLaunchError',
    'BrowserNotInitializedError',
    'DomFallbackStrategy',
    'DomScanner',
    'MediaParser',
    'ParseError',
    'first_non_empty',
    'MediaProber',
    'filename_from_url',
    'format_size',
    'MediaResource',
    'MIN_RESOURCE_SIZE',
    'NetworkMonitor',
    'NetworkStrategy',
]

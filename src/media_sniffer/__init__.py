"""
Media Sniffer

Finds downloadable video/audio links on web pages.
"""

__version__ = '1.0.0'

"""
Media Models - Media Sniffer

Value types shared by the discovery strategies.
"""

from dataclasses import dataclass, asdict
from typing import Dict

# Smaller resources are usually thumbnails, previews or player chrome
MIN_RESOURCE_SIZE = 1024 * 1024  # 1 MiB

UNKNOWN_FILENAME = 'unknown'
UNKNOWN_SIZE = 'Unknown'


@dataclass(frozen=True)
class MediaResource:
    """A discovered media file."""

    filename: str
    type: str
    url: str
    size: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

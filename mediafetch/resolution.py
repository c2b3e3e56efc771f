from __future__ import annotations

import re
from typing import NamedTuple

UNKNOWN = "unknown"

# Ranking used when ordering tiers for display; anything missing ranks 0.
QUALITY_RANK = {"4K": 6, "1440p": 5, "1080p": 4, "720p": 3, "480p": 2, "360p": 1}

_CANONICAL_TIERS = {
    (480, 270): "480p",
    (640, 360): "360p",
    (854, 480): "480p",
    (1280, 720): "720p",
    (1920, 1080): "1080p",
    (2560, 1440): "1440p",
    (3840, 2160): "4K",
}

# (min width, min height, tier), checked top-down.
_THRESHOLDS = (
    (3840, 2160, "4K"),
    (2560, 1440, "1440p"),
    (1920, 1080, "1080p"),
    (1280, 720, "720p"),
    (854, 480, "480p"),
    (640, 360, "360p"),
)

_URL_RESOLUTION = re.compile(r"/(\d+)x(\d+)/", re.ASCII)


class Resolution(NamedTuple):
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height


def _to_int(value: str) -> int | None:
    value = value.strip()
    if not (value.isascii() and value.isdecimal()):
        return None
    return int(value)


def parse_resolution(label: str | None) -> Resolution:
    """Parse ``"<W>x<H>"`` into numbers.

    Anything absent, ``"unknown"`` or not made of two numeric parts yields a
    zero-area resolution instead of raising.
    """
    if not label or label == UNKNOWN:
        return Resolution(0, 0)
    parts = label.split("x")
    if len(parts) != 2:
        return Resolution(0, 0)
    width, height = (_to_int(p) for p in parts)
    if width is None or height is None:
        return Resolution(0, 0)
    return Resolution(width, height)


def format_resolution(width, height) -> str:
    """Build a resolution label from raw upstream dimensions."""
    if isinstance(width, bool) or isinstance(height, bool):
        return UNKNOWN
    if not isinstance(width, int) or not isinstance(height, int):
        return UNKNOWN
    return f"{width}x{height}"


def resolution_from_url(url: str | None) -> str | None:
    """Return the ``/<W>x<H>/`` path segment of a CDN locator, if present."""
    if not url:
        return None
    match = _URL_RESOLUTION.search(url)
    if not match:
        return None
    return f"{match.group(1)}x{match.group(2)}"


def classify_quality(label: str | None) -> str:
    if not label or label == UNKNOWN:
        return UNKNOWN
    parts = label.split("x")
    if len(parts) != 2:
        return UNKNOWN
    width, height = (_to_int(p) for p in parts)
    if width is None or height is None:
        return UNKNOWN

    exact = _CANONICAL_TIERS.get((width, height))
    if exact:
        return exact

    for min_width, min_height, tier in _THRESHOLDS:
        if width >= min_width or height >= min_height:
            return tier
    return UNKNOWN


def quality_rank(tier: str) -> int:
    return QUALITY_RANK.get(tier, 0)

from __future__ import annotations

import re
from typing import Any

from mediafetch.dedup import OrderedSet
from mediafetch.models import Author, MediaItem
from mediafetch.resolution import UNKNOWN, parse_resolution, quality_rank
from mediafetch.time_utils import compact_stamp

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')
MAX_NAME_LENGTH = 50


def clean_name(value: str | None) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", value or "unknown")[:MAX_NAME_LENGTH]


def build_download_summary(
    status_id: str,
    user: Author,
    created_at: str,
    media: list[MediaItem],
) -> dict[str, Any]:
    """Read-only digest of the final media list plus suggested filenames."""
    qualities: OrderedSet[str] = OrderedSet()
    resolutions: OrderedSet[str] = OrderedSet()
    total_variants = 0
    for item in media:
        total_variants += len(item.variants)
        for variant in item.variants:
            if variant.quality and variant.quality != UNKNOWN:
                qualities.add(variant.quality)
            if variant.resolution and variant.resolution != UNKNOWN:
                resolutions.add(variant.resolution)

    sorted_qualities = sorted(qualities, key=quality_rank, reverse=True)
    sorted_resolutions = sorted(resolutions, key=lambda r: parse_resolution(r).area, reverse=True)

    date_time = compact_stamp(created_at)
    user_name = clean_name(user.name or "Unknown")
    screen_name = user.screen_name or "unknown"

    return {
        "id": status_id,
        "user_name": user_name,
        "user_id": screen_name,
        "date_time": date_time,
        "media_count": len(media),
        "total_files": len(media),
        "total_variants": total_variants,
        "highest_quality": sorted_qualities[0] if sorted_qualities else UNKNOWN,
        "available_qualities": sorted_qualities,
        "available_resolutions": sorted_resolutions,
        "suggested_filenames": {
            "default": f"content_{user_name}_{status_id}",
            "simple": f"{screen_name}_{status_id}",
            "with_date": f"{date_time}_{screen_name}_{status_id}",
        },
    }

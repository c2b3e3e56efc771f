from __future__ import annotations

from typing import Iterable

from mediafetch.dedup import OrderedSet
from mediafetch.models import MediaItem, Variant
from mediafetch.resolution import UNKNOWN, classify_quality, parse_resolution, resolution_from_url


def sort_by_area(variants: Iterable[Variant]) -> list[Variant]:
    """Largest pixel area first; ``sorted`` is stable so ties keep source order."""
    return sorted(variants, key=lambda v: parse_resolution(v.resolution).area, reverse=True)


def _synthesize_variant(item: MediaItem) -> Variant | None:
    if not item.url:
        return None
    resolution = resolution_from_url(item.url) or item.size or UNKNOWN
    return Variant(url=item.url, resolution=resolution, quality=classify_quality(resolution))


def distinct_known(values: Iterable[str | None]) -> list[str]:
    seen: OrderedSet[str] = OrderedSet()
    seen.update(value for value in values if value and value != UNKNOWN)
    return seen.to_list()


def rank_media_item(item: MediaItem) -> MediaItem:
    """Order an item's variants and derive its best/available qualities in place.

    Running it again on an already ranked item changes nothing.
    """
    if not item.variants:
        synthesized = _synthesize_variant(item)
        if synthesized is not None:
            item.variants = [synthesized]

    item.variants = sort_by_area(item.variants)
    if not item.variants:
        return item

    best = item.variants[0]
    item.url = best.url
    item.download_url = best.url
    item.best_quality = best.quality
    item.available_qualities = distinct_known(v.quality for v in item.variants)
    item.available_resolutions = distinct_known(v.resolution for v in item.variants)
    return item


def rank_media(items: Iterable[MediaItem]) -> list[MediaItem]:
    return [rank_media_item(item) for item in items]

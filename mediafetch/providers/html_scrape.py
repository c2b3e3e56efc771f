from __future__ import annotations

import logging
import re

import httpx

from mediafetch.config import ServiceConfig
from mediafetch.dedup import OrderedSet
from mediafetch.http_utils import html_headers
from mediafetch.models import METHOD_HTML, Author, CandidateResult, MediaItem, Variant
from mediafetch.ranking import distinct_known, sort_by_area
from mediafetch.resolution import UNKNOWN, classify_quality, resolution_from_url
from mediafetch.time_utils import now_iso

LOGGER = logging.getLogger(__name__)

# Distinct CDN path shapes; the first one is a catch-all, the rest are kept
# so that a change to one shape does not hide the others.
VIDEO_PATTERNS = (
    re.compile(r"https://video\.twimg\.com/[^\"'\s]*\.mp4"),
    re.compile(r"https://video\.twimg\.com/amplify_video/\d+/[^\"'\s]*\.mp4"),
    re.compile(r"https://video\.twimg\.com/ext_tw_video/\d+/[^\"'\s]*\.mp4"),
    re.compile(r"https://video\.twimg\.com/tweet_video/[^\"'\s]*\.mp4"),
)

_GROUP_TOKEN = re.compile(r"amplify_video/(\d+)")

PLACEHOLDER_TEXT = "Extracted content"


def extract_video_variants(html: str) -> list[Variant]:
    """All distinct MP4 locators in the markup, in discovery order."""
    urls: OrderedSet[str] = OrderedSet()
    for pattern in VIDEO_PATTERNS:
        urls.update(pattern.findall(html))

    variants = []
    for url in urls:
        resolution = resolution_from_url(url) or UNKNOWN
        variants.append(
            Variant(
                url=url,
                resolution=resolution,
                quality=classify_quality(resolution),
                content_type="video/mp4",
            )
        )
    return variants


def group_token(url: str) -> str:
    match = _GROUP_TOKEN.search(url)
    return match.group(1) if match else UNKNOWN


def group_variants(variants: list[Variant]) -> dict[str, list[Variant]]:
    groups: dict[str, list[Variant]] = {}
    for variant in variants:
        groups.setdefault(group_token(variant.url), []).append(variant)
    return groups


def build_media(variants: list[Variant]) -> list[MediaItem]:
    media = []
    for group in group_variants(variants).values():
        ranked = sort_by_area(group)
        best = ranked[0]
        media.append(
            MediaItem(
                type="video",
                url=best.url,
                download_url=best.url,
                thumbnail_url="",
                variants=ranked,
                best_quality=best.quality,
                available_qualities=distinct_known(v.quality for v in ranked),
                available_resolutions=distinct_known(v.resolution for v in ranked),
            )
        )
    return media


class HTMLScrapeProvider:
    """Last resort: regex the status page markup for video.twimg.com MP4 locators.

    Author and text are not recoverable here and are filled with placeholders.
    """

    name = "html_scrape"
    method = METHOD_HTML

    def __init__(self, config: ServiceConfig | None = None) -> None:
        self.config = config or ServiceConfig()

    def parse(self, html: str) -> CandidateResult | None:
        media = build_media(extract_video_variants(html))
        if not media:
            return None
        return CandidateResult(
            method=self.method,
            user=Author(),
            text=PLACEHOLDER_TEXT,
            created_at=now_iso(),
            media=media,
        )

    async def collect(self, client: httpx.AsyncClient, status_id: str) -> CandidateResult | None:
        url = self.config.page_url(status_id)
        try:
            resp = await client.get(url, headers=html_headers(self.config.user_agent))
            if not resp.is_success:
                LOGGER.warning("%s fetch failed: status=%s url=%s", self.name, resp.status_code, url)
                return None
            result = self.parse(resp.text)
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("%s failed for %s: %s: %s", self.name, status_id, type(exc).__name__, exc)
            return None

        if result is None:
            LOGGER.warning("%s found no video locators for %s", self.name, status_id)
        else:
            LOGGER.info("%s collected %s media for %s", self.name, len(result.media), status_id)
        return result

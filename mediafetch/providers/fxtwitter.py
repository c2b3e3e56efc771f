from __future__ import annotations

import logging
from typing import Any

import httpx

from mediafetch.config import ServiceConfig
from mediafetch.http_utils import api_headers
from mediafetch.models import METHOD_FXTWITTER, Author, CandidateResult, MediaItem, Variant
from mediafetch.resolution import classify_quality, format_resolution
from mediafetch.time_utils import normalize_timestamp

LOGGER = logging.getLogger(__name__)


def _to_item(media: dict[str, Any]) -> MediaItem | None:
    kind = media.get("type")
    url = media.get("url")
    if not url or kind not in {"photo", "video", "gif"}:
        return None

    size = format_resolution(media.get("width"), media.get("height"))
    item = MediaItem(
        type=kind,
        url=url,
        download_url=url,
        width=media.get("width"),
        height=media.get("height"),
        size=size,
    )
    if kind == "photo":
        item.variants = [Variant(url=url, resolution=size, quality="original")]
    else:
        item.thumbnail_url = media.get("thumbnail_url")
        item.duration = media.get("duration")
        item.variants = [Variant(url=url, resolution=size, quality=classify_quality(size))]
    return item


class FxTwitterProvider:
    """FxTwitter status API; one variant per video since only the dimensions it serves are known."""

    name = "fxtwitter"
    method = METHOD_FXTWITTER

    def __init__(self, config: ServiceConfig | None = None) -> None:
        self.config = config or ServiceConfig()

    def parse(self, data: dict[str, Any]) -> CandidateResult | None:
        tweet = data.get("tweet") if isinstance(data, dict) else None
        if not isinstance(tweet, dict) or not tweet.get("media"):
            return None

        author = tweet.get("author") or {}
        result = CandidateResult(
            method=self.method,
            user=Author(
                name=author.get("name") or "Unknown",
                screen_name=author.get("screen_name") or "unknown",
                profile_image_url=author.get("avatar_url") or "",
            ),
            text=tweet.get("text") or "",
            created_at=normalize_timestamp(tweet.get("created_timestamp")),
        )
        for media in tweet["media"].get("all") or []:
            if not isinstance(media, dict):
                continue
            item = _to_item(media)
            if item is not None:
                result.media.append(item)
        return result

    async def collect(self, client: httpx.AsyncClient, status_id: str) -> CandidateResult | None:
        url = self.config.fxtwitter_url(status_id)
        try:
            resp = await client.get(url, headers=api_headers(self.config.user_agent))
            if not resp.is_success:
                LOGGER.warning("%s fetch failed: status=%s url=%s", self.name, resp.status_code, url)
                return None
            result = self.parse(resp.json())
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("%s failed for %s: %s: %s", self.name, status_id, type(exc).__name__, exc)
            return None

        if result is not None:
            LOGGER.info("%s collected %s media for %s", self.name, len(result.media), status_id)
        return result

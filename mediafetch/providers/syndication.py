from __future__ import annotations

import logging
from typing import Any

import httpx

from mediafetch.config import ServiceConfig
from mediafetch.http_utils import api_headers
from mediafetch.models import METHOD_SYNDICATION, Author, CandidateResult, MediaItem, Variant
from mediafetch.ranking import sort_by_area
from mediafetch.resolution import classify_quality, format_resolution, resolution_from_url
from mediafetch.time_utils import now_iso

LOGGER = logging.getLogger(__name__)

MEDIA_FIELDS = ("photos", "video", "animated_gif")


def _photo_item(photo: dict[str, Any]) -> MediaItem:
    url = photo.get("url")
    original = f"{url}?format=jpg&name=orig"
    size = format_resolution(photo.get("width"), photo.get("height"))
    return MediaItem(
        type="photo",
        url=url,
        download_url=original,
        width=photo.get("width"),
        height=photo.get("height"),
        size=size,
        variants=[Variant(url=original, resolution=size, quality="original")],
    )


def _mp4_variants(raw_variants: Any, fallback_resolution: str) -> list[Variant]:
    if not isinstance(raw_variants, list):
        return []
    variants: list[Variant] = []
    for raw in raw_variants:
        if not isinstance(raw, dict) or raw.get("type") != "video/mp4" or not raw.get("src"):
            continue
        resolution = resolution_from_url(raw["src"]) or fallback_resolution
        variants.append(
            Variant(
                url=raw["src"],
                resolution=resolution,
                quality=classify_quality(resolution),
                bitrate=raw.get("bitrate"),
                content_type=raw.get("content_type") or "video/mp4",
            )
        )
    return variants


def _motion_item(kind: str, payload: dict[str, Any]) -> MediaItem:
    size = format_resolution(payload.get("width"), payload.get("height"))
    item = MediaItem(
        type=kind,
        thumbnail_url=payload.get("thumbnail_url"),
        duration=payload.get("duration") if kind == "video" else None,
        width=payload.get("width"),
        height=payload.get("height"),
        size=size,
        variants=sort_by_area(_mp4_variants(payload.get("variants"), size)),
    )
    if item.variants:
        item.url = item.variants[0].url
        item.download_url = item.variants[0].url
        item.best_quality = item.variants[0].quality
    return item


class SyndicationProvider:
    """Twitter's public embed (syndication) JSON.

    Several query variants of the same endpoint are tried in sequence; the
    first OK response that carries photos, a video or an animated gif wins.
    """

    name = "syndication"
    method = METHOD_SYNDICATION

    def __init__(self, config: ServiceConfig | None = None) -> None:
        self.config = config or ServiceConfig()

    def parse(self, data: dict[str, Any]) -> CandidateResult | None:
        if not isinstance(data, dict) or all(data.get(key) is None for key in MEDIA_FIELDS):
            return None

        user = data.get("user") or {}
        result = CandidateResult(
            method=self.method,
            user=Author(
                name=user.get("name") or "Unknown",
                screen_name=user.get("screen_name") or "unknown",
                profile_image_url=user.get("profile_image_url_https") or "",
            ),
            text=data.get("text") or "",
            created_at=data.get("created_at") or now_iso(),
        )

        photos = data.get("photos")
        if isinstance(photos, list):
            result.media.extend(_photo_item(p) for p in photos if isinstance(p, dict) and p.get("url"))
        if isinstance(data.get("video"), dict):
            result.media.append(_motion_item("video", data["video"]))
        if isinstance(data.get("animated_gif"), dict):
            result.media.append(_motion_item("gif", data["animated_gif"]))
        return result

    async def collect(self, client: httpx.AsyncClient, status_id: str) -> CandidateResult | None:
        headers = api_headers(self.config.user_agent)
        try:
            for endpoint in self.config.syndication_urls(status_id):
                resp = await client.get(endpoint, headers=headers)
                if not resp.is_success:
                    LOGGER.debug("syndication status=%s url=%s", resp.status_code, endpoint)
                    continue
                result = self.parse(resp.json())
                if result is not None:
                    LOGGER.info("%s collected %s media for %s", self.name, len(result.media), status_id)
                    return result
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("%s failed for %s: %s: %s", self.name, status_id, type(exc).__name__, exc)
        return None

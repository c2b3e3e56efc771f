from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

METHOD_SYNDICATION = "api_a"
METHOD_FXTWITTER = "api_b"
METHOD_HTML = "api_c"
METHOD_STANDARD = "standard"


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(slots=True)
class Variant:
    url: str
    resolution: str
    quality: str
    bitrate: int | None = None
    content_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "url": self.url,
                "quality": self.quality,
                "bitrate": self.bitrate,
                "content_type": self.content_type,
                "resolution": self.resolution,
            }
        )


@dataclass(slots=True)
class MediaItem:
    type: str  # photo | video | gif
    url: str | None = None
    download_url: str | None = None
    thumbnail_url: str | None = None
    duration: float | None = None
    width: int | None = None
    height: int | None = None
    size: str | None = None
    variants: list[Variant] = field(default_factory=list)
    best_quality: str | None = None
    available_qualities: list[str] | None = None
    available_resolutions: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        data = _drop_none(
            {
                "type": self.type,
                "url": self.url,
                "download_url": self.download_url,
                "thumbnail_url": self.thumbnail_url,
                "duration": self.duration,
                "width": self.width,
                "height": self.height,
                "size": self.size,
                "best_quality": self.best_quality,
                "available_qualities": self.available_qualities,
                "available_resolutions": self.available_resolutions,
            }
        )
        data["variants"] = [variant.to_dict() for variant in self.variants]
        return data


@dataclass(slots=True)
class Author:
    name: str = "Unknown"
    screen_name: str = "unknown"
    profile_image_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "screen_name": self.screen_name,
            "profile_image_url": self.profile_image_url,
        }


@dataclass(slots=True)
class CandidateResult:
    """What one upstream source produced for a status id."""

    method: str
    user: Author
    text: str
    created_at: str
    media: list[MediaItem] = field(default_factory=list)

    @property
    def has_media(self) -> bool:
        return bool(self.media)


@dataclass(slots=True)
class AggregatedResult:
    url: str
    id: str
    method: str
    user: Author
    text: str
    created_at: str
    media: list[MediaItem]
    download_info: dict[str, Any]

    @property
    def media_count(self) -> int:
        return len(self.media)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "url": self.url,
            "id": self.id,
            "method": self.method,
            "user": self.user.to_dict(),
            "text": self.text,
            "created_at": self.created_at,
            "media": [item.to_dict() for item in self.media],
            "media_count": self.media_count,
            "download_info": self.download_info,
        }

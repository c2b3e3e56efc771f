from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

STATUS_ID = "1234567890123"

SYNDICATION_HOST = "cdn.syndication.twimg.com"
FXTWITTER_HOST = "api.fxtwitter.com"
PAGE_HOST = "twitter.com"


def syndication_video_payload() -> dict[str, Any]:
    return {
        "user": {
            "name": "Jack: the <first>",
            "screen_name": "jack",
            "profile_image_url_https": "https://pbs.twimg.com/profile_images/1/a.jpg",
        },
        "text": "hello video",
        "created_at": "2024-03-05T07:08:09.000Z",
        "video": {
            "thumbnail_url": "https://pbs.twimg.com/thumb.jpg",
            "duration": 12.5,
            "width": 1280,
            "height": 720,
            "variants": [
                {"type": "application/x-mpegURL", "src": "https://video.twimg.com/ext_tw_video/9/pu/pl/a.m3u8"},
                {
                    "type": "video/mp4",
                    "src": "https://video.twimg.com/ext_tw_video/9/pu/vid/640x360/low.mp4",
                    "bitrate": 832000,
                },
                {
                    "type": "video/mp4",
                    "src": "https://video.twimg.com/ext_tw_video/9/pu/vid/1280x720/high.mp4",
                    "bitrate": 2176000,
                },
            ],
        },
    }


def fxtwitter_photo_payload() -> dict[str, Any]:
    return {
        "code": 200,
        "tweet": {
            "text": "hello photo",
            "created_timestamp": 1700000000,
            "author": {"name": "Other", "screen_name": "other", "avatar_url": "https://pbs.twimg.com/b.jpg"},
            "media": {
                "all": [
                    {"type": "photo", "url": "https://pbs.twimg.com/media/P1.jpg", "width": 1200, "height": 800},
                ]
            },
        },
    }


def page_html() -> str:
    return (
        "<html><script>"
        '"https://video.twimg.com/amplify_video/555/vid/avc1/640x360/a.mp4"'
        '"https://video.twimg.com/amplify_video/555/vid/avc1/1920x1080/b.mp4"'
        '"https://video.twimg.com/amplify_video/555/vid/avc1/640x360/a.mp4"'
        "'https://video.twimg.com/amplify_video/777/vid/avc1/1280x720/c.mp4'"
        "</script></html>"
    )


Handler = Callable[[httpx.Request], httpx.Response]


def json_reply(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload), headers={"content-type": "application/json"})


class FakeUpstream:
    """Routes requests by host and records every call."""

    def __init__(self, routes: dict[str, Handler] | None = None) -> None:
        self.routes = dict(routes or {})
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self.routes.get(request.url.host)
        if handler is None:
            return httpx.Response(404)
        return handler(request)

    def hosts(self) -> list[str]:
        return [request.url.host for request in self.calls]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()

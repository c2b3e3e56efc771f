from __future__ import annotations

import asyncio

import httpx

from mediafetch.providers import FxTwitterProvider, HTMLScrapeProvider, SyndicationProvider
from mediafetch.providers.html_scrape import extract_video_variants, group_token

from conftest import (
    FXTWITTER_HOST,
    PAGE_HOST,
    STATUS_ID,
    SYNDICATION_HOST,
    FakeUpstream,
    fxtwitter_photo_payload,
    json_reply,
    page_html,
    syndication_video_payload,
)


def _collect(provider, upstream: FakeUpstream):
    async def run():
        async with httpx.AsyncClient(transport=upstream.transport) as client:
            return await provider.collect(client, STATUS_ID)

    return asyncio.run(run())


def _raise(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("boom", request=request)


# --- syndication ---------------------------------------------------------


def test_syndication_video_keeps_only_mp4_renditions():
    upstream = FakeUpstream({SYNDICATION_HOST: lambda r: json_reply(syndication_video_payload())})
    result = _collect(SyndicationProvider(), upstream)

    assert result.method == "api_a"
    assert result.user.screen_name == "jack"
    assert result.user.profile_image_url.endswith("a.jpg")
    assert len(result.media) == 1

    video = result.media[0]
    assert video.type == "video"
    assert [v.resolution for v in video.variants] == ["1280x720", "640x360"]
    assert [v.quality for v in video.variants] == ["720p", "360p"]
    assert video.variants[0].bitrate == 2176000
    assert video.variants[0].content_type == "video/mp4"
    assert video.url == video.variants[0].url
    assert video.size == "1280x720"
    assert upstream.hosts() == [SYNDICATION_HOST]


def test_syndication_tries_next_endpoint_on_bad_status_or_empty_payload():
    replies = iter([httpx.Response(503), json_reply({"text": "no media"}), json_reply(syndication_video_payload())])
    upstream = FakeUpstream({SYNDICATION_HOST: lambda r: next(replies)})
    result = _collect(SyndicationProvider(), upstream)

    assert result is not None
    queries = [request.url.query.decode() for request in upstream.calls]
    assert queries == [f"id={STATUS_ID}", f"id={STATUS_ID}&token=abc123", f"id={STATUS_ID}&lang=en"]


def test_syndication_photos_use_original_size():
    payload = {
        "user": {"name": "A", "screen_name": "a"},
        "photos": [{"url": "https://pbs.twimg.com/media/X.jpg", "width": 2048, "height": 1536}],
    }
    result = SyndicationProvider().parse(payload)

    photo = result.media[0]
    assert photo.type == "photo"
    assert photo.download_url == "https://pbs.twimg.com/media/X.jpg?format=jpg&name=orig"
    assert photo.variants[0].quality == "original"
    assert photo.variants[0].resolution == "2048x1536"


def test_syndication_rendition_without_url_resolution_uses_video_size():
    payload = {
        "animated_gif": {
            "width": 480,
            "height": 270,
            "variants": [{"type": "video/mp4", "src": "https://video.twimg.com/tweet_video/G.mp4"}],
        }
    }
    gif = SyndicationProvider().parse(payload).media[0]
    assert gif.type == "gif"
    assert gif.variants[0].resolution == "480x270"
    assert gif.variants[0].quality == "480p"


def test_syndication_absent_on_network_error_or_all_failures():
    assert _collect(SyndicationProvider(), FakeUpstream({SYNDICATION_HOST: _raise})) is None
    assert _collect(SyndicationProvider(), FakeUpstream({SYNDICATION_HOST: lambda r: httpx.Response(404)})) is None
    garbled = FakeUpstream({SYNDICATION_HOST: lambda r: httpx.Response(200, content=b"<html>")})
    assert _collect(SyndicationProvider(), garbled) is None


# --- fxtwitter -----------------------------------------------------------


def test_fxtwitter_builds_single_variant_items():
    payload = fxtwitter_photo_payload()
    payload["tweet"]["media"]["all"].append(
        {
            "type": "video",
            "url": "https://video.twimg.com/ext_tw_video/1/pu/vid/a.mp4",
            "thumbnail_url": "https://pbs.twimg.com/t.jpg",
            "width": 1920,
            "height": 1080,
            "duration": 3.2,
        }
    )
    upstream = FakeUpstream({FXTWITTER_HOST: lambda r: json_reply(payload)})
    result = _collect(FxTwitterProvider(), upstream)

    assert result.method == "api_b"
    assert result.user.name == "Other"
    assert result.created_at == "2023-11-14T22:13:20.000Z"
    photo, video = result.media
    assert photo.variants[0].quality == "original"
    assert len(video.variants) == 1
    assert video.variants[0].quality == "1080p"
    assert video.variants[0].resolution == "1920x1080"
    assert upstream.calls[0].url.path == f"/twitter/status/{STATUS_ID}"


def test_fxtwitter_absent_without_media_or_on_error():
    no_media = FakeUpstream({FXTWITTER_HOST: lambda r: json_reply({"tweet": {"text": "hi"}})})
    assert _collect(FxTwitterProvider(), no_media) is None
    assert _collect(FxTwitterProvider(), FakeUpstream({FXTWITTER_HOST: _raise})) is None
    assert _collect(FxTwitterProvider(), FakeUpstream({FXTWITTER_HOST: lambda r: httpx.Response(500)})) is None


# --- html scrape ---------------------------------------------------------


def test_extract_video_variants_dedupes_by_exact_url():
    variants = extract_video_variants(page_html())
    urls = [v.url for v in variants]
    assert len(urls) == len(set(urls)) == 3
    assert all(v.content_type == "video/mp4" for v in variants)


def test_group_token():
    assert group_token("https://video.twimg.com/amplify_video/555/vid/a.mp4") == "555"
    assert group_token("https://video.twimg.com/tweet_video/a.mp4") == "unknown"


def test_html_scrape_groups_and_ranks():
    upstream = FakeUpstream({PAGE_HOST: lambda r: httpx.Response(200, text=page_html())})
    result = _collect(HTMLScrapeProvider(), upstream)

    assert result.method == "api_c"
    assert result.user.name == "Unknown"
    assert result.user.screen_name == "unknown"
    assert result.text == "Extracted content"
    assert len(result.media) == 2
    first, second = result.media
    assert [v.resolution for v in first.variants] == ["1920x1080", "640x360"]
    assert first.best_quality == "1080p"
    assert first.available_qualities == ["1080p", "360p"]
    assert second.available_resolutions == ["1280x720"]
    assert upstream.calls[0].url.path == f"/i/web/status/{STATUS_ID}"
    assert upstream.calls[0].headers["accept"].startswith("text/html")


def test_html_scrape_absent_without_matches():
    empty = FakeUpstream({PAGE_HOST: lambda r: httpx.Response(200, text="<html></html>")})
    assert _collect(HTMLScrapeProvider(), empty) is None
    assert _collect(HTMLScrapeProvider(), FakeUpstream({PAGE_HOST: _raise})) is None

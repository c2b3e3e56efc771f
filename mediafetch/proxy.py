from __future__ import annotations

import logging
from urllib.parse import urlparse

import httpx
from fastapi import BackgroundTasks
from fastapi.responses import PlainTextResponse, Response, StreamingResponse

from mediafetch.config import ServiceConfig
from mediafetch.http_utils import build_client, media_headers

LOGGER = logging.getLogger(__name__)

_HOP_BY_HOP = {"connection", "keep-alive", "transfer-encoding", "upgrade", "proxy-connection"}

PROXY_CORS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Expose-Headers": "*",
}


def filename_from_url(url: str) -> str:
    try:
        path = urlparse(url).path
    except ValueError:
        return "download"
    return path.rsplit("/", 1)[-1] or "download"


def content_type_for(url: str) -> str | None:
    if ".mp4" in url:
        return "video/mp4"
    if ".jpg" in url or ".jpeg" in url:
        return "image/jpeg"
    if ".png" in url:
        return "image/png"
    return None


def proxy_headers(url: str, upstream: httpx.Headers) -> dict[str, str]:
    headers = {key: value for key, value in upstream.items() if key.lower() not in _HOP_BY_HOP}
    headers.update(PROXY_CORS)

    if any(ext in url for ext in (".mp4", ".jpg", ".png")):
        headers["content-disposition"] = f'attachment; filename="{filename_from_url(url)}"'
    forced = content_type_for(url)
    if forced:
        headers["content-type"] = forced
    return headers


async def proxy_media(
    media_url: str,
    config: ServiceConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Response:
    """Re-serve a media locator with permissive CORS and a download disposition."""
    if not media_url or not media_url.startswith("http"):
        return PlainTextResponse("Invalid URL", status_code=400)

    client = build_client(config, transport)
    try:
        request = client.build_request("GET", media_url, headers=media_headers(config.user_agent))
        upstream = await client.send(request, stream=True)
    except Exception as exc:  # noqa: BLE001
        await client.aclose()
        LOGGER.warning("Proxy error for %s: %s: %s", media_url, type(exc).__name__, exc)
        return PlainTextResponse(f"Proxy error: {exc}", status_code=500)

    if not upstream.is_success:
        status = upstream.status_code
        await upstream.aclose()
        await client.aclose()
        return PlainTextResponse(f"Failed to fetch media: {status}", status_code=status)

    async def _close() -> None:
        await upstream.aclose()
        await client.aclose()

    cleanup = BackgroundTasks()
    cleanup.add_task(_close)
    return StreamingResponse(
        upstream.aiter_raw(),
        status_code=upstream.status_code,
        headers=proxy_headers(media_url, upstream.headers),
        background=cleanup,
    )

from __future__ import annotations

import httpx

from mediafetch.config import DEFAULT_USER_AGENT, ServiceConfig


def api_headers(user_agent: str = DEFAULT_USER_AGENT) -> dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }


def html_headers(user_agent: str = DEFAULT_USER_AGENT) -> dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    }


def media_headers(user_agent: str = DEFAULT_USER_AGENT) -> dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": "*/*",
        "Accept-Language": "en-US,en;q=0.9",
        "Referer": "https://twitter.com/",
        "Origin": "https://twitter.com",
        # Byte-exact passthrough; no transparent decompression.
        "Accept-Encoding": "identity",
    }


def cors_headers(content_type: str | None = None) -> dict[str, str]:
    headers = {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }
    if content_type:
        headers["Content-Type"] = content_type
    return headers


def build_client(
    config: ServiceConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=config.request_timeout,
        headers={"User-Agent": config.user_agent},
        follow_redirects=True,
        transport=transport,
    )

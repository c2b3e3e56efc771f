from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from mediafetch import __version__
from mediafetch.config import SUPPORTED_PLATFORMS, ServiceConfig
from mediafetch.http_utils import cors_headers
from mediafetch.proxy import proxy_media
from mediafetch.runner import build_response

LOGGER = logging.getLogger(__name__)


def json_response(data: dict[str, Any], status_code: int = 200) -> Response:
    return Response(
        content=json.dumps(data, ensure_ascii=False, indent=2),
        status_code=status_code,
        headers=cors_headers("application/json"),
    )


def create_app(
    config: ServiceConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the HTTP app. ``transport`` is handed to every outbound httpx client."""
    config = config or ServiceConfig.from_env()
    app = FastAPI(title="mediafetch", version=__version__)

    async def lookup(reference: str) -> Response:
        status_code, payload = await build_response(reference, config, transport=transport)
        return json_response(payload, status_code)

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        for key, value in cors_headers().items():
            if key not in response.headers:
                response.headers[key] = value
        return response

    @app.options("/{rest:path}")
    async def preflight(rest: str) -> Response:  # noqa: ARG001
        return Response(status_code=200, headers=cors_headers())

    @app.get("/health")
    async def health() -> Response:
        return json_response({"status": "ok", "version": __version__})

    @app.get("/a/{reference:path}")
    async def lookup_get(reference: str) -> Response:
        return await lookup(reference)

    @app.post("/a")
    async def lookup_post(request: Request) -> Response:
        try:
            body = await request.json()
        except ValueError:
            return json_response({"success": False, "error": "Invalid request"}, 400)
        reference = body.get("url") if isinstance(body, dict) else None
        if not isinstance(reference, str):
            return json_response({"success": False, "error": "Invalid request"}, 400)
        return await lookup(reference)

    @app.get("/proxy/{media_url:path}")
    async def proxy(media_url: str, request: Request) -> Response:
        if request.url.query:
            media_url = f"{media_url}?{request.url.query}"
        return await proxy_media(media_url, config, transport)

    @app.get("/")
    async def dispatch(request: Request) -> Response:
        params = request.query_params
        if not params:
            return PlainTextResponse("API Service")

        platform = params.get("platform")
        reference = params.get("url")
        if not platform or not reference:
            return json_response({"success": False, "error": "platform and url are required"}, 400)
        if platform.lower() not in SUPPORTED_PLATFORMS:
            return json_response({"success": False, "error": "Unsupported platform"}, 400)
        return await lookup(reference)

    return app

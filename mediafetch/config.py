from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

DEFAULT_SYNDICATION_BASE = "https://cdn.syndication.twimg.com"
DEFAULT_FXTWITTER_BASE = "https://api.fxtwitter.com"
DEFAULT_PAGE_BASE = "https://twitter.com"

# Query variants tried in order against the syndication endpoint.
SYNDICATION_QUERIES = ("", "&token=abc123", "&lang=en")

SUPPORTED_PLATFORMS = ("twitter", "x")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class ServiceConfig:
    request_timeout: float = 20.0
    user_agent: str = DEFAULT_USER_AGENT

    syndication_base: str = DEFAULT_SYNDICATION_BASE
    fxtwitter_base: str = DEFAULT_FXTWITTER_BASE
    page_base: str = DEFAULT_PAGE_BASE

    def syndication_urls(self, status_id: str) -> list[str]:
        base = self.syndication_base.rstrip("/")
        return [f"{base}/tweet-result?id={status_id}{suffix}" for suffix in SYNDICATION_QUERIES]

    def fxtwitter_url(self, status_id: str) -> str:
        return f"{self.fxtwitter_base.rstrip('/')}/twitter/status/{status_id}"

    def page_url(self, status_id: str) -> str:
        return f"{self.page_base.rstrip('/')}/i/web/status/{status_id}"

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        return cls(
            request_timeout=_env_float("MEDIAFETCH_TIMEOUT", 20.0),
            user_agent=os.getenv("MEDIAFETCH_USER_AGENT") or DEFAULT_USER_AGENT,
            syndication_base=os.getenv("MEDIAFETCH_SYNDICATION_BASE") or DEFAULT_SYNDICATION_BASE,
            fxtwitter_base=os.getenv("MEDIAFETCH_FXTWITTER_BASE") or DEFAULT_FXTWITTER_BASE,
            page_base=os.getenv("MEDIAFETCH_PAGE_BASE") or DEFAULT_PAGE_BASE,
        )

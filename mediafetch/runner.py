from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Protocol, Sequence

import httpx

from mediafetch.config import ServiceConfig
from mediafetch.errors import ContentUnavailable, InvalidReference, MediaFetchError, ServiceError
from mediafetch.http_utils import build_client
from mediafetch.models import METHOD_STANDARD, AggregatedResult, CandidateResult
from mediafetch.providers import FxTwitterProvider, HTMLScrapeProvider, SyndicationProvider
from mediafetch.ranking import rank_media
from mediafetch.summary import build_download_summary
from mediafetch.time_utils import normalize_timestamp

LOGGER = logging.getLogger(__name__)

_STATUS_ID = re.compile(r"\d{10,}")


class Provider(Protocol):
    name: str

    async def collect(self, client: httpx.AsyncClient, status_id: str) -> CandidateResult | None: ...


def extract_status_id(reference: str | None) -> str:
    match = _STATUS_ID.search(reference or "")
    if not match:
        raise InvalidReference(f"no status id in {reference!r}")
    return match.group(0)


def default_providers(config: ServiceConfig) -> tuple[list[Provider], list[Provider]]:
    """(concurrent sources in priority order, sequential last-resort sources)."""
    return (
        [SyndicationProvider(config), FxTwitterProvider(config)],
        [HTMLScrapeProvider(config)],
    )


async def _collect_with_isolation(
    provider: Provider,
    client: httpx.AsyncClient,
    status_id: str,
) -> CandidateResult | None:
    try:
        return await provider.collect(client, status_id)
    except Exception as exc:  # noqa: BLE001
        LOGGER.warning("%s raised for %s: %s: %s", provider.name, status_id, type(exc).__name__, exc)
        return None


def pick_first_with_media(results: Sequence[CandidateResult | None]) -> CandidateResult | None:
    for result in results:
        if result is not None and result.has_media:
            return result
    return None


async def aggregate(
    reference: str,
    client: httpx.AsyncClient,
    config: ServiceConfig | None = None,
    *,
    primary: Sequence[Provider] | None = None,
    fallback: Sequence[Provider] | None = None,
) -> AggregatedResult:
    status_id = extract_status_id(reference)
    LOGGER.info("Processing: %s", status_id)

    if primary is None or fallback is None:
        default_primary, default_fallback = default_providers(config or ServiceConfig())
        primary = default_primary if primary is None else primary
        fallback = default_fallback if fallback is None else fallback

    # Concurrent fan-out; a failing source never cancels its sibling.
    results = await asyncio.gather(*(_collect_with_isolation(p, client, status_id) for p in primary))
    chosen = pick_first_with_media(results)

    if chosen is None:
        for provider in fallback:
            chosen = pick_first_with_media([await _collect_with_isolation(provider, client, status_id)])
            if chosen is not None:
                break

    if chosen is None:
        raise ContentUnavailable(status_id=status_id)

    media = rank_media(chosen.media)
    created_at = normalize_timestamp(chosen.created_at)
    method = chosen.method or METHOD_STANDARD
    LOGGER.info("Resolved %s via %s with %s media", status_id, method, len(media))

    return AggregatedResult(
        url=reference,
        id=status_id,
        method=method,
        user=chosen.user,
        text=chosen.text,
        created_at=created_at,
        media=media,
        download_info=build_download_summary(status_id, chosen.user, created_at, media),
    )


async def build_response(
    reference: str,
    config: ServiceConfig | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[int, dict[str, Any]]:
    """Run one lookup and map the outcome to (HTTP status, JSON envelope)."""
    config = config or ServiceConfig()
    try:
        if client is not None:
            result = await aggregate(reference, client, config)
        else:
            async with build_client(config, transport) as own_client:
                result = await aggregate(reference, own_client, config)
        return 200, result.to_dict()
    except MediaFetchError as exc:
        LOGGER.info("Lookup failed for %r: %s", reference, exc)
        return exc.status_code, exc.to_dict()
    except Exception:  # noqa: BLE001
        LOGGER.exception("Unexpected failure for %r", reference)
        error = ServiceError()
        return error.status_code, error.to_dict()


def lookup_sync(reference: str, config: ServiceConfig | None = None) -> tuple[int, dict[str, Any]]:
    return asyncio.run(build_response(reference, config))

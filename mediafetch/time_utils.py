from __future__ import annotations

from datetime import datetime, timezone

# Legacy Twitter timestamp, e.g. "Wed Oct 10 20:19:24 +0000 2018".
_TWITTER_FORMAT = "%a %b %d %H:%M:%S %z %Y"


def now_utc() -> datetime:
    return datetime.now(tz=timezone.utc)


def iso_z(value: datetime) -> str:
    """Millisecond ISO-8601 in UTC with a trailing ``Z``."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def now_iso() -> str:
    return iso_z(now_utc())


def parse_timestamp(value) -> datetime | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        try:
            parsed = datetime.strptime(text, _TWITTER_FORMAT)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_timestamp(value) -> str:
    """Render any upstream timestamp as ISO-8601; missing or garbled values become now."""
    parsed = parse_timestamp(value)
    return iso_z(parsed if parsed is not None else now_utc())


def compact_stamp(value: str) -> str:
    """``YYYYMMDD-HHMMSS`` (UTC) for use in filenames."""
    parsed = parse_timestamp(value) or now_utc()
    return parsed.astimezone(timezone.utc).strftime("%Y%m%d-%H%M%S")

from __future__ import annotations

from typing import Any


class MediaFetchError(Exception):
    status_code = 500
    public_message = "Service error"

    def __init__(self, detail: str | None = None, *, status_id: str | None = None) -> None:
        super().__init__(detail or self.public_message)
        self.status_id = status_id

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": False, "error": self.public_message}
        if self.status_id:
            payload["id"] = self.status_id
        return payload


class InvalidReference(MediaFetchError):
    """No status id could be pulled out of the caller's reference."""

    status_code = 400
    public_message = "Invalid URL"


class ContentUnavailable(MediaFetchError):
    """Every source came back without media."""

    status_code = 404
    public_message = "Content not available"


class ServiceError(MediaFetchError):
    status_code = 500
    public_message = "Service error"

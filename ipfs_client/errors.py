"""Error taxonomy shared by the transport, envelope and decoder layers.

Every failure a client call can produce is one of four kinds:

- `TransportError`: the daemon could not be reached or did not answer in time.
- `HttpStatusError`: the daemon answered with a status other than 200.
- `ParseError`: the daemon answered 200 but the body is not the expected JSON.
- `MissingFieldsError`: the JSON parsed but lacks keys the resource requires.

Facade methods return these inside `Err` rather than raising them.
"""

from __future__ import annotations

import json
from typing import Iterable

__all__ = [
    "HttpStatusError",
    "IPFSError",
    "MissingFieldsError",
    "ParseError",
    "TransportError",
]

_MAX_ERROR_TEXT_CHARS = 2048


def _truncate(text: str, *, limit: int) -> str:
    """Return a truncated string with an ellipsis when needed."""
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    head = text[: max(0, limit - 3)].rstrip()
    return f"{head}..."


class IPFSError(RuntimeError):
    """Base class for every failure surfaced by the client."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = str(message)


class TransportError(IPFSError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, message: str, *, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = bool(timed_out)


class HttpStatusError(IPFSError):
    """The daemon answered with a non-200 status.

    The status code and raw body are kept verbatim so callers can inspect the
    daemon's own error payload (usually `{"Message": ..., "Code": ...}`).
    """

    def __init__(self, status_code: int, body: bytes = b"") -> None:
        self.status_code = int(status_code)
        self.body = bytes(body or b"")
        text = _truncate(self.body.decode("utf-8", errors="replace").strip(), limit=_MAX_ERROR_TEXT_CHARS)
        super().__init__(text or "HTTP request failed")

    @property
    def daemon_message(self) -> str | None:
        """Best-effort extraction of the daemon's `Message` field."""
        try:
            payload = json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            return None
        if isinstance(payload, dict) and isinstance(payload.get("Message"), str):
            return payload["Message"]
        return None

    def __str__(self) -> str:
        return f"{self.message} (status={self.status_code})"


class ParseError(IPFSError):
    """The response body could not be read as the expected document."""


class MissingFieldsError(IPFSError):
    """The document parsed but lacks keys required by the resource."""

    def __init__(self, resource: str, fields: Iterable[str]) -> None:
        self.resource = str(resource)
        self.fields = tuple(fields)
        super().__init__(f"{self.resource} response is missing fields: {', '.join(self.fields)}")

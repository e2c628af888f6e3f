"""Optional flags accepted by the name and key endpoints."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

__all__ = ["RequestOptions"]


@dataclass(frozen=True, slots=True)
class RequestOptions:
    """Daemon-side flags for `name/publish`, `name/resolve` and `key/gen`.

    Every option starts unset (None). Only options that were given a value
    are sent; nothing is defaulted on the client side.

    `timeout` is the daemon's own query flag (e.g. "30s"), not the client's
    read timeout.
    """

    resolve: bool | None = None
    lifetime: str | None = None
    ttl: str | None = None
    key: str | None = None
    recursive: bool | None = None
    nocache: bool | None = None
    type: str | None = None
    size: int | None = None
    timeout: str | None = None

    def to_params(self) -> dict[str, Any]:
        """Return the set options as query parameters, in declaration order."""
        params: dict[str, Any] = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is not None:
                params[field.name] = value
        return params

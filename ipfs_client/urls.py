"""Request URL construction for the daemon's `/api/v0` endpoints."""

from __future__ import annotations

from typing import Any, Mapping, Sequence
from urllib.parse import urlencode

from ipfs_client.config import ClientConfig

__all__ = ["API_PREFIX", "base_url", "build_url", "encode_query_value"]

API_PREFIX = "/api/v0/"


def encode_query_value(value: Any) -> str:
    """Render a query value the way the daemon's flag parser expects."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def base_url(config: ClientConfig) -> str:
    return f"http://{config.host}:{config.port}{API_PREFIX}"


def build_url(
    config: ClientConfig,
    path: str,
    args: Sequence[Any] = (),
    params: Mapping[str, Any] | None = None,
) -> str:
    """Compose the full URL for an API call.

    Positional arguments become repeated `arg` parameters, in order, followed
    by the named parameters in the order given. Parameters whose value is
    None are left out.
    """
    pairs: list[tuple[str, str]] = [("arg", encode_query_value(arg)) for arg in args]
    for name, value in (params or {}).items():
        if value is None:
            continue
        pairs.append((name, encode_query_value(value)))
    url = base_url(config) + path.lstrip("/")
    if not pairs:
        return url
    return f"{url}?{urlencode(pairs, safe='/:')}"

"""JSON codec used for daemon payloads."""

from __future__ import annotations

import json
from typing import Any

from ipfs_client.errors import ParseError

__all__ = ["parse", "serialize"]


def parse(payload: bytes) -> Any:
    """Decode a JSON payload.

    Raises:
        ParseError: When the payload is not UTF-8 encoded JSON.
    """
    try:
        return json.loads(payload.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ParseError(f"Response is not valid UTF-8: {exc}") from exc
    except RecursionError as exc:
        raise ParseError("Invalid JSON response: nested too deeply") from exc
    except ValueError as exc:
        raise ParseError(f"Invalid JSON response: {exc}") from exc


def serialize(document: Any) -> bytes:
    """Encode a document to compact UTF-8 JSON."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

"""Result variants and the first stage of response decoding.

A transport call produces an `Envelope`: either `Ok(body_bytes)` or
`Err(error)`. Decoders turn an envelope into a typed `Result` and never look at
the payload of an `Err`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar, Union

from loguru import logger

from ipfs_client import codec
from ipfs_client.errors import IPFSError, ParseError

log = logger.bind(module="envelope")

__all__ = ["Envelope", "Err", "Ok", "Result", "decode_document"]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """Failed outcome carrying the error that caused it."""

    error: IPFSError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the carried error."""
        raise self.error


Result = Union[Ok[T], Err]
Envelope = Union[Ok[bytes], Err]


def decode_document(envelope: Envelope) -> Result[dict[str, Any]]:
    """Parse a successful envelope into a JSON object.

    Failures already carried by the envelope are returned unchanged. A body
    that is not JSON, or whose top level is not an object, becomes a
    `ParseError`.
    """
    if isinstance(envelope, Err):
        return envelope
    try:
        document = codec.parse(envelope.value)
    except ParseError as exc:
        log.debug("Discarding undecodable response: {}", exc.message)
        return Err(exc)
    if not isinstance(document, dict):
        log.debug("Expected a JSON object, got {}", type(document).__name__)
        return Err(ParseError(f"Expected a JSON object, got {type(document).__name__}"))
    return Ok(document)

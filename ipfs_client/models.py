"""Typed values returned by the daemon.

Each field mirrors one key of the daemon's JSON response. Instances are only
produced by the decoders in `ipfs_client.decoders`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = [
    "Identity",
    "Key",
    "Link",
    "Object",
    "ObjectStat",
    "PatchObject",
    "Pin",
    "Published",
    "Version",
]


@dataclass(frozen=True, slots=True)
class Version:
    """Daemon version information."""

    version: str
    commit: str


@dataclass(frozen=True, slots=True)
class Link:
    """A named link from one object to another."""

    name: str
    hash: str
    size: int

    def to_document(self) -> dict[str, Any]:
        return {"Name": self.name, "Hash": self.hash, "Size": self.size}


@dataclass(frozen=True, slots=True)
class Object:
    """A DAG node: its data and its ordered links."""

    links: tuple[Link, ...]
    data: str

    def to_document(self) -> dict[str, Any]:
        return {"Links": [link.to_document() for link in self.links], "Data": self.data}


@dataclass(frozen=True, slots=True)
class ObjectStat:
    hash: str
    num_links: int
    block_size: int
    links_size: int
    data_size: int
    cumulative_size: int


@dataclass(frozen=True, slots=True)
class Identity:
    """Peer identity as reported by `id`."""

    id: str
    public_key: str
    addresses: tuple[str, ...]
    agent_version: str
    protocol_version: str


@dataclass(frozen=True, slots=True)
class Pin:
    """One pinned object; `hash` is the key it was listed under."""

    hash: str
    type: str
    count: int


@dataclass(frozen=True, slots=True)
class Published:
    """Result of publishing or resolving a name.

    `name` is only set by `name/publish`; `name/resolve` reports the path alone.
    """

    name: str | None
    value: str


@dataclass(frozen=True, slots=True)
class Key:
    name: str
    id: str


@dataclass(frozen=True, slots=True)
class PatchObject:
    """Hash (and links) of an object created or modified by the daemon."""

    hash: str
    links: tuple[Link, ...] = ()

    def to_document(self) -> dict[str, Any]:
        return {"Hash": self.hash, "Links": [link.to_document() for link in self.links]}

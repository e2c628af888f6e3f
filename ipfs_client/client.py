"""Client for the IPFS daemon HTTP API.

Every method performs exactly one HTTP call and returns a `Result`: `Ok(value)`
on success, `Err(error)` otherwise. Nothing is retried or cached, and the
client holds no state besides its immutable configuration and transport.
"""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Sequence

from loguru import logger

from ipfs_client import codec
from ipfs_client.config import ClientConfig, get_default_config
from ipfs_client.decoders import (
    decode_addrs,
    decode_identity,
    decode_key,
    decode_keys,
    decode_links,
    decode_object,
    decode_object_stat,
    decode_patch_object,
    decode_peers,
    decode_pinned,
    decode_pins,
    decode_published,
    decode_raw,
    decode_strings,
    decode_version,
)
from ipfs_client.envelope import Envelope, Result
from ipfs_client.models import Identity, Key, Link, Object, ObjectStat, PatchObject, Pin, Published, Version
from ipfs_client.net.http import HttpClient
from ipfs_client.options import RequestOptions
from ipfs_client.urls import build_url

if TYPE_CHECKING:
    import httpx

log = logger.bind(module="client")

__all__ = ["IPFSClient"]

PROTOBUF_ENCODING = "protobuf"


class IPFSClient:
    """Typed wrapper around the daemon's `/api/v0` endpoints."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: "httpx.BaseTransport | None" = None,
        reuse_connections: bool = False,
    ) -> None:
        self.config = config if config is not None else get_default_config()
        self._http = HttpClient(
            timeout_seconds=self.config.timeout_seconds,
            user_agent=self.config.user_agent,
            transport=transport,
            reuse_connections=bool(reuse_connections),
        )

    def close(self) -> None:
        """Close any underlying persistent HTTP resources."""
        self._http.close()

    def __enter__(self) -> "IPFSClient":
        self._http.open()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def _get(
        self,
        path: str,
        args: Sequence[Any] = (),
        params: Mapping[str, Any] | None = None,
        *,
        timeout_seconds: float | None = None,
    ) -> Envelope:
        url = build_url(self.config, path, args, params)
        return self._http.get(url, timeout_seconds=timeout_seconds)

    def version(self) -> Result[Version]:
        """Request the daemon's version."""
        return decode_version(self._get("version"))

    def swarm_peers(self) -> Result[list[str]]:
        """List the addresses of connected peers."""
        return decode_strings(self._get("swarm/peers"))

    def swarm_addrs(self) -> Result[dict[str, list[str]]]:
        """Map each known peer id to its known addresses."""
        return decode_addrs(self._get("swarm/addrs"))

    def block_get(self, key: str) -> Result[bytes]:
        """Fetch the raw bytes of a block."""
        return decode_raw(self._get("block/get", [key]))

    def object_get(self, key: str, *, encoding: str | None = None) -> Result[Object] | Result[bytes]:
        """Fetch a DAG node.

        With `encoding="protobuf"` the daemon's serialized node is returned as
        raw bytes instead of a decoded `Object`.
        """
        envelope = self._get("object/get", [key], {"encoding": encoding})
        if encoding == PROTOBUF_ENCODING:
            return decode_raw(envelope)
        return decode_object(envelope)

    def object_data(self, key: str) -> Result[bytes]:
        """Fetch the raw data segment of a DAG node."""
        return decode_raw(self._get("object/data", [key]))

    def object_links(self, key: str) -> Result[PatchObject]:
        return decode_links(self._get("object/links", [key]))

    def object_new(self, template: str | None = None) -> Result[PatchObject]:
        """Create a new object, optionally from a template such as "unixfs-dir"."""
        args = [template] if template is not None else []
        return decode_patch_object(self._get("object/new", args))

    def object_put(
        self,
        data: bytes,
        links: Iterable[Link] = (),
        *,
        pin: bool = False,
    ) -> Result[PatchObject]:
        """Store a DAG node built from `data` and `links`.

        The node is sent as JSON in the multipart field `data`, with its
        `Data` member base64-encoded.
        """
        links = list(links)
        log.debug("Putting object: {} data bytes, {} links, pin={}", len(data), len(links), pin)
        node = {
            "Data": base64.b64encode(bytes(data)).decode("ascii"),
            "Links": [link.to_document() for link in links],
        }
        url = build_url(self.config, "object/put", params={"datafieldenc": "base64", "pin": pin})
        files = {"data": ("data", codec.serialize(node), "application/json")}
        return decode_patch_object(self._http.post(url, files=files))

    def object_stat(self, key: str) -> Result[ObjectStat]:
        return decode_object_stat(self._get("object/stat", [key]))

    def object_patch_add_link(
        self,
        root: str,
        name: str,
        ref: str,
        *,
        create: bool | None = None,
    ) -> Result[PatchObject]:
        """Add a link named `name` pointing at `ref` to the object `root`."""
        envelope = self._get("object/patch/add-link", [root, name, ref], {"create": create})
        return decode_patch_object(envelope)

    def identity(self, peer_id: str | None = None) -> Result[Identity]:
        """Describe the local node, or the peer `peer_id` when given."""
        args = [peer_id] if peer_id is not None else []
        return decode_identity(self._get("id", args))

    def bootstrap_list(self) -> Result[list[str]]:
        return decode_peers(self._get("bootstrap/list"))

    def pin_ls(self, key: str | None = None, *, type: str | None = None) -> Result[list[Pin]]:
        """List pinned objects, optionally restricted to `key` or a pin type."""
        args = [key] if key is not None else []
        return decode_pins(self._get("pin/ls", args, {"type": type}))

    def pin_add(self, key: str, *, recursive: bool | None = None) -> Result[list[str]]:
        return decode_pinned(self._get("pin/add", [key], {"recursive": recursive}))

    def pin_rm(self, key: str, *, recursive: bool | None = None) -> Result[list[str]]:
        return decode_pinned(self._get("pin/rm", [key], {"recursive": recursive}))

    def name_publish(self, path: str, options: RequestOptions | None = None) -> Result[Published]:
        """Publish `path` under the node's (or `options.key`'s) name.

        Publishing waits on the DHT, so this call uses the longer
        `publish_timeout_seconds` from the config.
        """
        params = (options or RequestOptions()).to_params()
        envelope = self._get(
            "name/publish",
            [path],
            params,
            timeout_seconds=self.config.publish_timeout_seconds,
        )
        return decode_published(envelope)

    def name_resolve(self, name: str | None = None, options: RequestOptions | None = None) -> Result[Published]:
        """Resolve `name`, or the node's own name when omitted."""
        args = [name] if name is not None else []
        params = (options or RequestOptions()).to_params()
        return decode_published(self._get("name/resolve", args, params))

    def key_gen(self, name: str, options: RequestOptions | None = None) -> Result[Key]:
        """Generate a keypair; `options.type` and `options.size` select the algorithm."""
        params = (options or RequestOptions()).to_params()
        return decode_key(self._get("key/gen", [name], params))

    def key_list(self) -> Result[list[Key]]:
        return decode_keys(self._get("key/list"))

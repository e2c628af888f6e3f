"""Python client for the IPFS daemon HTTP API."""

from __future__ import annotations

__version__ = "0.1.0"

from ipfs_client.client import IPFSClient
from ipfs_client.config import ClientConfig, get_default_config
from ipfs_client.envelope import Err, Ok, Result
from ipfs_client.errors import (
    HttpStatusError,
    IPFSError,
    MissingFieldsError,
    ParseError,
    TransportError,
)
from ipfs_client.models import (
    Identity,
    Key,
    Link,
    Object,
    ObjectStat,
    PatchObject,
    Pin,
    Published,
    Version,
)
from ipfs_client.options import RequestOptions

__all__ = [
    "ClientConfig",
    "Err",
    "HttpStatusError",
    "IPFSClient",
    "IPFSError",
    "Identity",
    "Key",
    "Link",
    "MissingFieldsError",
    "Object",
    "ObjectStat",
    "Ok",
    "ParseError",
    "PatchObject",
    "Pin",
    "Published",
    "RequestOptions",
    "Result",
    "TransportError",
    "Version",
    "get_default_config",
    "__version__",
]

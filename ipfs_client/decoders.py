"""Turn response envelopes into typed results.

Every decoder is total: given an envelope it returns `Ok(record)` or
`Err(error)` and never raises. Failures already carried by the envelope are
passed through without touching the body.

Each response shape has a private pydantic schema keyed by the daemon's own
field names. Validation is strict, so a record is only built once every
required key is present with the expected JSON type: absent keys become a
`MissingFieldsError`, anything else a `ParseError`.

The daemon marshals empty collections as `null`; collection-valued keys treat
`null` as empty.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ipfs_client.envelope import Envelope, Err, Ok, Result, decode_document
from ipfs_client.errors import IPFSError, MissingFieldsError, ParseError
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

log = logger.bind(module="decoders")

__all__ = [
    "decode_addrs",
    "decode_identity",
    "decode_key",
    "decode_keys",
    "decode_links",
    "decode_object",
    "decode_object_stat",
    "decode_patch_object",
    "decode_peers",
    "decode_pinned",
    "decode_pins",
    "decode_published",
    "decode_raw",
    "decode_strings",
    "decode_version",
]

SchemaT = TypeVar("SchemaT", bound=BaseModel)
T = TypeVar("T")


def _empty_list(value: object) -> object:
    return [] if value is None else value


def _empty_dict(value: object) -> object:
    return {} if value is None else value


class _Schema(BaseModel):
    """Base for daemon response schemas."""

    model_config = ConfigDict(frozen=True, strict=True)


class _VersionModel(_Schema):
    Version: str
    Commit: str


class _LinkModel(_Schema):
    Name: str
    Hash: str
    Size: int


class _ObjectModel(_Schema):
    Links: list[_LinkModel]
    Data: str

    @field_validator("Links", mode="before")
    @classmethod
    def _links_default(cls, v: object) -> object:
        return _empty_list(v)


class _ObjectStatModel(_Schema):
    Hash: str
    NumLinks: int
    BlockSize: int
    LinksSize: int
    DataSize: int
    CumulativeSize: int


class _IdentityModel(_Schema):
    ID: str
    PublicKey: str
    Addresses: list[str]
    AgentVersion: str
    ProtocolVersion: str

    @field_validator("Addresses", mode="before")
    @classmethod
    def _addresses_default(cls, v: object) -> object:
        return _empty_list(v)


class _PinEntryModel(_Schema):
    Type: str
    Count: int


class _PinListModel(_Schema):
    Keys: dict[str, _PinEntryModel]

    @field_validator("Keys", mode="before")
    @classmethod
    def _keys_default(cls, v: object) -> object:
        return _empty_dict(v)


class _PublishedModel(_Schema):
    """`name/publish` and `name/resolve` output.

    `false` is treated like an absent value, so it falls through to `Path`.
    """

    Name: str | None = None
    Value: str | None = None
    Path: str | None = None

    @field_validator("Value", "Path", mode="before")
    @classmethod
    def _false_as_unset(cls, v: object) -> object:
        return None if v is False else v


class _KeyModel(_Schema):
    Name: str
    Id: str


class _KeyListModel(_Schema):
    Keys: list[_KeyModel]

    @field_validator("Keys", mode="before")
    @classmethod
    def _keys_default(cls, v: object) -> object:
        return _empty_list(v)


class _PatchObjectModel(_Schema):
    Hash: str
    Links: list[_LinkModel] = Field(default_factory=list)

    @field_validator("Links", mode="before")
    @classmethod
    def _links_default(cls, v: object) -> object:
        return _empty_list(v)


class _SwarmPeersModel(_Schema):
    Strings: list[str]

    @field_validator("Strings", mode="before")
    @classmethod
    def _strings_default(cls, v: object) -> object:
        return _empty_list(v)


class _SwarmAddrsModel(_Schema):
    Addrs: dict[str, list[str]]

    @field_validator("Addrs", mode="before")
    @classmethod
    def _addrs_default(cls, v: object) -> object:
        return _empty_dict(v)


class _BootstrapListModel(_Schema):
    Peers: list[str]

    @field_validator("Peers", mode="before")
    @classmethod
    def _peers_default(cls, v: object) -> object:
        return _empty_list(v)


class _PinChangeModel(_Schema):
    Pins: list[str]

    @field_validator("Pins", mode="before")
    @classmethod
    def _pins_default(cls, v: object) -> object:
        return _empty_list(v)


def _location(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _from_validation_error(resource: str, exc: ValidationError) -> IPFSError:
    """Map pydantic errors onto the client's error taxonomy.

    Absent keys win over type errors: a record that is both incomplete and
    mistyped is reported as incomplete.
    """
    errors = exc.errors()
    missing = [_location(error["loc"]) for error in errors if error["type"] == "missing"]
    if missing:
        return MissingFieldsError(resource, missing)
    first = errors[0]
    return ParseError(f"{resource}.{_location(first['loc'])}: {first['msg']}")


def _decode(
    envelope: Envelope,
    resource: str,
    schema: type[SchemaT],
    to_domain: Callable[[SchemaT], T],
) -> Result[T]:
    document = decode_document(envelope)
    if isinstance(document, Err):
        return document
    try:
        parsed = schema.model_validate(document.value)
        return Ok(to_domain(parsed))
    except ValidationError as exc:
        error = _from_validation_error(resource, exc)
    except MissingFieldsError as exc:
        error = exc
    log.debug("Rejecting {} response: {}", resource, error.message)
    return Err(error)


def _links(links: list[_LinkModel]) -> tuple[Link, ...]:
    return tuple(Link(name=link.Name, hash=link.Hash, size=link.Size) for link in links)


def _version(output: _VersionModel) -> Version:
    return Version(version=output.Version, commit=output.Commit)


def _object(output: _ObjectModel) -> Object:
    return Object(links=_links(output.Links), data=output.Data)


def _object_stat(output: _ObjectStatModel) -> ObjectStat:
    return ObjectStat(
        hash=output.Hash,
        num_links=output.NumLinks,
        block_size=output.BlockSize,
        links_size=output.LinksSize,
        data_size=output.DataSize,
        cumulative_size=output.CumulativeSize,
    )


def _identity(output: _IdentityModel) -> Identity:
    return Identity(
        id=output.ID,
        public_key=output.PublicKey,
        addresses=tuple(output.Addresses),
        agent_version=output.AgentVersion,
        protocol_version=output.ProtocolVersion,
    )


def _pins(output: _PinListModel) -> list[Pin]:
    return [Pin(hash=pin_hash, type=entry.Type, count=entry.Count) for pin_hash, entry in output.Keys.items()]


def _published(output: _PublishedModel) -> Published:
    value = output.Value if output.Value is not None else output.Path
    if value is None:
        raise MissingFieldsError("Published", ("Value", "Path"))
    return Published(name=output.Name, value=value)


def _key(output: _KeyModel) -> Key:
    return Key(name=output.Name, id=output.Id)


def _patch_object(output: _PatchObjectModel) -> PatchObject:
    return PatchObject(hash=output.Hash, links=_links(output.Links))


def decode_raw(envelope: Envelope) -> Result[bytes]:
    """Return the body untouched; used for endpoints that answer with raw bytes."""
    return envelope


def decode_version(envelope: Envelope) -> Result[Version]:
    return _decode(envelope, "Version", _VersionModel, _version)


def decode_object(envelope: Envelope) -> Result[Object]:
    """Decode `object/get`; links keep the order the daemon sent them in."""
    return _decode(envelope, "Object", _ObjectModel, _object)


def decode_object_stat(envelope: Envelope) -> Result[ObjectStat]:
    return _decode(envelope, "ObjectStat", _ObjectStatModel, _object_stat)


def decode_identity(envelope: Envelope) -> Result[Identity]:
    return _decode(envelope, "Identity", _IdentityModel, _identity)


def decode_pins(envelope: Envelope) -> Result[list[Pin]]:
    """Decode `pin/ls`: one `Pin` per entry of the `Keys` map."""
    return _decode(envelope, "PinList", _PinListModel, _pins)


def decode_published(envelope: Envelope) -> Result[Published]:
    """Decode `name/publish` and `name/resolve`.

    `Value` is preferred over `Path` when both are set.
    """
    return _decode(envelope, "Published", _PublishedModel, _published)


def decode_key(envelope: Envelope) -> Result[Key]:
    return _decode(envelope, "Key", _KeyModel, _key)


def decode_keys(envelope: Envelope) -> Result[list[Key]]:
    return _decode(envelope, "KeyList", _KeyListModel, lambda output: [_key(key) for key in output.Keys])


def decode_patch_object(envelope: Envelope) -> Result[PatchObject]:
    """Decode responses that describe a new or modified object.

    Used by `object/new`, `object/put` and `object/patch/add-link`. `Links`
    defaults to empty when absent.
    """
    return _decode(envelope, "PatchObject", _PatchObjectModel, _patch_object)


def decode_links(envelope: Envelope) -> Result[PatchObject]:
    """Decode `object/links`: the object's hash and its links, in order."""
    return _decode(envelope, "ObjectLinks", _PatchObjectModel, _patch_object)


def decode_strings(envelope: Envelope) -> Result[list[str]]:
    """Decode `swarm/peers`."""
    return _decode(envelope, "SwarmPeers", _SwarmPeersModel, lambda output: list(output.Strings))


def decode_peers(envelope: Envelope) -> Result[list[str]]:
    """Decode `bootstrap/list`."""
    return _decode(envelope, "BootstrapList", _BootstrapListModel, lambda output: list(output.Peers))


def decode_pinned(envelope: Envelope) -> Result[list[str]]:
    """Decode `pin/add` and `pin/rm`."""
    return _decode(envelope, "PinChange", _PinChangeModel, lambda output: list(output.Pins))


def decode_addrs(envelope: Envelope) -> Result[dict[str, list[str]]]:
    """Decode `swarm/addrs`: peer id to the addresses known for it."""
    return _decode(
        envelope,
        "SwarmAddrs",
        _SwarmAddrsModel,
        lambda output: {peer: list(addrs) for peer, addrs in output.Addrs.items()},
    )

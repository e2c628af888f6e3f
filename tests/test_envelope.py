from __future__ import annotations

import pytest

from ipfs_client import codec
from ipfs_client.envelope import Err, Ok, decode_document
from ipfs_client.errors import HttpStatusError, ParseError, TransportError


def test_decode_document_parses_json_object() -> None:
    assert decode_document(Ok(b'{"a": 1}')) == Ok({"a": 1})


def test_decode_document_passes_failures_through_unchanged() -> None:
    failure = Err(TransportError("connection refused"))
    assert decode_document(failure) is failure


def test_decode_document_rejects_invalid_json() -> None:
    result = decode_document(Ok(b"not json"))
    assert isinstance(result, Err)
    assert isinstance(result.error, ParseError)


def test_decode_document_rejects_non_object_top_level() -> None:
    result = decode_document(Ok(b'"not json"'))
    assert isinstance(result, Err)
    assert isinstance(result.error, ParseError)
    assert "str" in result.error.message


def test_decode_document_rejects_invalid_utf8() -> None:
    result = decode_document(Ok(b"\xff\xfe"))
    assert isinstance(result, Err)
    assert isinstance(result.error, ParseError)


def test_decode_document_rejects_deeply_nested_json() -> None:
    result = decode_document(Ok(b"[" * 200000 + b"]" * 200000))
    assert isinstance(result, Err)
    assert isinstance(result.error, ParseError)
    assert "nested too deeply" in result.error.message


def test_unwrap_returns_value_or_raises_error() -> None:
    assert Ok(3).unwrap() == 3
    assert Ok(3).ok is True
    failure = Err(HttpStatusError(500, b"boom"))
    assert failure.ok is False
    with pytest.raises(HttpStatusError):
        failure.unwrap()


def test_codec_serialize_is_compact_and_parse_inverts_it() -> None:
    payload = codec.serialize({"Name": "a", "Size": 3})
    assert payload == b'{"Name":"a","Size":3}'
    assert codec.parse(payload) == {"Name": "a", "Size": 3}


def test_http_status_error_exposes_daemon_message() -> None:
    error = HttpStatusError(500, b'{"Message": "merkledag: not found", "Code": 0}')
    assert error.status_code == 500
    assert error.daemon_message == "merkledag: not found"
    assert "merkledag: not found" in str(error)
    assert HttpStatusError(404, b"404 page not found").daemon_message is None

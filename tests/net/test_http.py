from __future__ import annotations

import httpx
import pytest

from ipfs_client.envelope import Err, Ok
from ipfs_client.errors import HttpStatusError, TransportError
from ipfs_client.net.http import HttpClient


def test_get_returns_raw_body_and_sends_headers() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.host == "example.local"
        assert request.url.path == "/api/v0/block/get"
        assert request.url.params.get_list("arg") == ["QmBlock"]
        assert request.headers.get("user-agent") == "test-agent"
        return httpx.Response(200, content=b"\x00\x01raw", request=request)

    transport = httpx.MockTransport(handler)
    client = HttpClient(user_agent="test-agent", transport=transport)
    envelope = client.get("http://example.local/api/v0/block/get?arg=QmBlock")
    assert envelope == Ok(b"\x00\x01raw")


def test_get_merges_extra_params_after_url_query() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert list(request.url.params.multi_items()) == [("arg", "a"), ("x", "1")]
        return httpx.Response(200, content=b"{}", request=request)

    transport = httpx.MockTransport(handler)
    client = HttpClient(transport=transport)
    assert client.get("http://example.local/api/v0/pin/ls?arg=a", params={"x": 1}) == Ok(b"{}")


def test_request_keeps_repeated_args_when_params_are_given() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params.get_list("arg") == ["root", "child"]
        assert request.url.params["create"] == "true"
        return httpx.Response(200, content=b"{}", request=request)

    transport = httpx.MockTransport(handler)
    client = HttpClient(transport=transport)
    response = client.request(
        "GET",
        "http://example.local/api/v0/object/patch/add-link?arg=root&arg=child",
        params={"create": True},
    )
    assert response.status_code == 200


@pytest.mark.parametrize("status", [201, 204, 404, 500])
def test_any_status_other_than_200_is_http_status_error(status: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=b'{"Message":"nope"}', request=request)

    transport = httpx.MockTransport(handler)
    client = HttpClient(transport=transport)
    envelope = client.get("http://example.local/api/v0/version")
    assert isinstance(envelope, Err)
    assert isinstance(envelope.error, HttpStatusError)
    assert envelope.error.status_code == status
    assert envelope.error.body == b'{"Message":"nope"}'


def test_request_raises_with_status_code_on_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, content=b"not found", request=request)

    transport = httpx.MockTransport(handler)
    client = HttpClient(transport=transport)
    with pytest.raises(HttpStatusError) as excinfo:
        client.request("GET", "http://example.local/missing")
    assert excinfo.value.status_code == 404
    assert "not found" in str(excinfo.value)


def test_connection_failure_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = httpx.MockTransport(handler)
    client = HttpClient(transport=transport)
    envelope = client.get("http://example.local/api/v0/version")
    assert isinstance(envelope, Err)
    assert isinstance(envelope.error, TransportError)
    assert envelope.error.timed_out is False
    assert "connection refused" in envelope.error.message


def test_timeout_is_transport_error_flagged_as_timed_out() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    transport = httpx.MockTransport(handler)
    client = HttpClient(transport=transport)
    envelope = client.get("http://example.local/api/v0/name/publish")
    assert isinstance(envelope, Err)
    assert isinstance(envelope.error, TransportError)
    assert envelope.error.timed_out is True


def test_per_call_timeout_overrides_default_and_is_clamped() -> None:
    seen: list[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.extensions["timeout"]["read"])
        return httpx.Response(200, content=b"", request=request)

    transport = httpx.MockTransport(handler)
    client = HttpClient(timeout_seconds=5.0, transport=transport)
    client.get("http://example.local/a")
    client.get("http://example.local/b", timeout_seconds=60.0)
    client.get("http://example.local/c", timeout_seconds=0.0)
    assert seen == [5.0, 60.0, 0.1]


def test_post_sends_multipart_fields() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.headers["content-type"].startswith("multipart/form-data; boundary=")
        body = request.read()
        assert b'name="data"' in body
        assert b'{"Data":"aGk="}' in body
        return httpx.Response(200, content=b'{"Hash":"QmNew"}', request=request)

    transport = httpx.MockTransport(handler)
    client = HttpClient(transport=transport)
    envelope = client.post(
        "http://example.local/api/v0/object/put",
        files={"data": ("data", b'{"Data":"aGk="}', "application/json")},
    )
    assert envelope == Ok(b'{"Hash":"QmNew"}')


def test_reused_connections_share_one_client() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, content=b"ok", request=request)

    transport = httpx.MockTransport(handler)
    with HttpClient(transport=transport, reuse_connections=True) as client:
        first = client._client
        client.get("http://example.local/one")
        client.get("http://example.local/two")
        assert client._client is first
    assert client._client is None
    assert calls == ["/one", "/two"]


def test_request_rejects_empty_url() -> None:
    client = HttpClient()
    with pytest.raises(ValueError, match="url must be non-empty"):
        client.request("GET", "  ")

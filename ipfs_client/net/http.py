"""Byte transport for daemon calls, built on top of httpx.

This module centralizes timeout and header behavior and folds every request
outcome into an `Envelope`: `Ok(body)` for a 200 response, `Err(...)` for
anything else. The body is never inspected here.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Mapping

import httpx
from loguru import logger

from ipfs_client.envelope import Envelope, Err, Ok
from ipfs_client.errors import HttpStatusError, IPFSError, TransportError

log = logger.bind(module="net.http")

__all__ = ["HttpClient"]

_MIN_TIMEOUT_SECONDS = 0.1

# A multipart field: raw bytes, or an httpx-style (filename, content, content_type) tuple.
FileField = bytes | tuple[str, bytes, str]


class HttpClient:
    """Small sync HTTP client with consistent defaults and error mapping.

    Notes:
        - By default, a short-lived `httpx.Client` is created per request.
        - When `reuse_connections=True`, an internal persistent `httpx.Client` is
          used to enable connection pooling. Call `close()` (or use this object
          as a context manager) to release resources deterministically.
        - Timeouts are clamped to at least `_MIN_TIMEOUT_SECONDS`.
        - Only status 200 counts as success.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 5.0,
        user_agent: str | None = None,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
        reuse_connections: bool = False,
    ) -> None:
        self.timeout_seconds = float(timeout_seconds)
        self.transport = transport
        self.reuse_connections = bool(reuse_connections)

        merged: dict[str, str] = dict(headers or {})
        if user_agent and "User-Agent" not in merged:
            merged["User-Agent"] = user_agent
        self.headers = merged
        self._client: httpx.Client | None = None
        self._finalizer: weakref.finalize | None = None

    def _build_client(self) -> httpx.Client:
        kwargs: dict[str, object] = {
            "timeout": self._timeout(None),
            "headers": self.headers,
        }
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.Client(**kwargs)  # type: ignore[arg-type]

    def _timeout(self, timeout_seconds: float | None) -> float:
        value = timeout_seconds if timeout_seconds is not None else self.timeout_seconds
        return float(max(_MIN_TIMEOUT_SECONDS, value))

    def open(self) -> None:
        """Open an internal persistent `httpx.Client` when reuse is enabled."""
        if not self.reuse_connections:
            return
        if self._client is not None:
            return
        self._client = self._build_client()
        # Ensure we don't leak open pools if callers forget to close explicitly.
        self._finalizer = weakref.finalize(self, self._client.close)

    def close(self) -> None:
        """Close any internal persistent `httpx.Client`."""
        if self._finalizer is not None:
            self._finalizer.detach()
            self._finalizer = None
        if self._client is None:
            return
        self._client.close()
        self._client = None

    def __enter__(self) -> "HttpClient":
        self.open()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    @contextmanager
    def _client_ctx(self) -> Iterator[httpx.Client]:
        if self.reuse_connections:
            self.open()
            assert self._client is not None
            yield self._client
            return
        with self._build_client() as client:
            yield client

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        files: Mapping[str, FileField] | None = None,
        timeout_seconds: float | None = None,
    ) -> httpx.Response:
        """Send an HTTP request and return the 200 response.

        Raises:
            TransportError: When no response was received.
            HttpStatusError: When the response status is not 200.
        """
        method = (method or "GET").strip().upper()
        target = (url or "").strip()
        if not target:
            raise ValueError("url must be non-empty.")
        if params:
            # Extra parameters go after the query already in the URL (the `arg` list).
            target = str(httpx.URL(target).copy_merge_params(dict(params)))

        log.debug("{} {}", method, target)
        try:
            with self._client_ctx() as client:
                response = client.request(
                    method,
                    target,
                    headers=dict(headers) if headers else None,
                    files=dict(files) if files else None,
                    timeout=self._timeout(timeout_seconds),
                )
        except httpx.TimeoutException as exc:
            log.warning("{} {} timed out: {}", method, target, exc)
            raise TransportError(f"HTTP request timed out: {exc}", timed_out=True) from exc
        except httpx.RequestError as exc:
            log.warning("{} {} failed: {}", method, target, exc)
            raise TransportError(f"HTTP request failed: {exc}") from exc

        if response.status_code != 200:
            log.warning("{} {} returned status {}", method, target, response.status_code)
            raise HttpStatusError(response.status_code, response.content)
        return response

    def send(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        files: Mapping[str, FileField] | None = None,
        timeout_seconds: float | None = None,
    ) -> Envelope:
        """Like `request`, but return the outcome as an envelope."""
        try:
            response = self.request(
                method,
                url,
                params=params,
                headers=headers,
                files=files,
                timeout_seconds=timeout_seconds,
            )
        except IPFSError as exc:
            return Err(exc)
        return Ok(response.content)

    def get(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_seconds: float | None = None,
    ) -> Envelope:
        """GET `url` and return the raw body (or the failure) as an envelope."""
        return self.send("GET", url, params=params, headers=headers, timeout_seconds=timeout_seconds)

    def post(
        self,
        url: str,
        *,
        files: Mapping[str, FileField] | None = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_seconds: float | None = None,
    ) -> Envelope:
        """POST a multipart body to `url` and return the outcome as an envelope."""
        return self.send(
            "POST",
            url,
            params=params,
            headers=headers,
            files=files,
            timeout_seconds=timeout_seconds,
        )

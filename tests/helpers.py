"""Shared test helpers for gofile_uploader tests."""

from __future__ import annotations

from email.message import Message
from email.parser import BytesParser
from typing import Any
from urllib.parse import parse_qs

import httpx


def envelope(data: Any = None, status: str = "ok") -> dict[str, Any]:
    """Build a Gofile response envelope."""
    body: dict[str, Any] = {"status": status}
    if data is not None:
        body["data"] = data
    return body


def form_fields(request: httpx.Request) -> dict[str, str]:
    """Decode an x-www-form-urlencoded request body."""
    parsed = parse_qs(request.content.decode("utf-8"), keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


def multipart_parts(content_type: str, body: bytes) -> list[Message]:
    """Split a multipart/form-data body into its parts."""
    raw = b"Content-Type: " + content_type.encode("ascii") + b"\r\n\r\n" + body
    message = BytesParser().parsebytes(raw)
    assert message.is_multipart()
    return list(message.get_payload())  # type: ignore[arg-type]


class MockApi:
    """Callable for httpx.MockTransport that serves canned envelopes.

    Routes are keyed by URL path without the leading slash, e.g.
    "getServer" or "uploadFile". Every request is recorded with its body
    already read.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        path: str,
        json: Any = None,
        *,
        content: bytes | None = None,
        status_code: int = 200,
        exc: Exception | None = None,
    ) -> None:
        self.routes[path] = (json, content, status_code, exc)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        json, content, status_code, exc = self.routes[request.url.path.lstrip("/")]
        if exc is not None:
            raise exc
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=json)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


class FailingReads:
    """Stream wrapper whose reads fail, standing in for a broken disk."""

    def __init__(self, stream: Any) -> None:
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        raise OSError("input/output error")

    def close(self) -> None:
        self._stream.close()

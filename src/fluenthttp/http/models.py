# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models exchanged with Transport implementations."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from ..context import RequestContext

HeaderList = list[tuple[str, str]]


def _header_value(headers: Iterable[tuple[str, str]], name: str) -> str | None:
    lower = name.lower()
    for key, value in headers:
        if key.lower() == lower:
            return value
    return None


class BodyStream:
    """
    Single-read response body.

    Wraps an iterable of byte chunks plus an optional close callback that
    releases the underlying connection. Reading after ``close()`` raises
    ValueError like any closed file object.
    """

    def __init__(self, chunks: Iterable[bytes], close: Callable[[], None] | None = None):
        self._chunks = iter(chunks)
        self._buffer = bytearray()
        self._on_close = close
        self._closed = False

    @classmethod
    def from_bytes(cls, data: bytes) -> BodyStream:
        return cls([bytes(data)] if data else [])

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed body stream")

    def read(self, size: int = -1) -> bytes:
        self._check_open()
        if size is None or size < 0:
            self._buffer.extend(b"".join(self._chunks))
            data = bytes(self._buffer)
            self._buffer.clear()
            return data

        while len(self._buffer) < size:
            chunk = next(self._chunks, None)
            if chunk is None:
                break
            self._buffer.extend(chunk)
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data

    def __iter__(self) -> Iterator[bytes]:
        self._check_open()
        if self._buffer:
            pending = bytes(self._buffer)
            self._buffer.clear()
            yield pending
        for chunk in self._chunks:
            if chunk:
                yield chunk

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._on_close is not None:
            self._on_close()

    def __enter__(self) -> BodyStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class HttpRequest:
    """Outbound request handed to Transport.send()."""

    method: str
    url: str
    headers: HeaderList = field(default_factory=list)
    body: bytes | None = None
    context: RequestContext = field(default_factory=RequestContext.background)

    def header(self, name: str) -> str | None:
        """First value of a header, matched case-insensitively."""
        return _header_value(self.headers, name)


@dataclass
class HttpResponse:
    """Response returned by a Transport, with the body still unread."""

    status_code: int
    reason: str = ""
    headers: HeaderList = field(default_factory=list)
    stream: BodyStream = field(default_factory=lambda: BodyStream.from_bytes(b""))
    url: str | None = None

    @property
    def status(self) -> str:
        """Human-readable status line, e.g. ``404 Not Found``."""
        return f"{self.status_code} {self.reason}".strip()

    def header(self, name: str) -> str | None:
        return _header_value(self.headers, name)

    @property
    def charset(self) -> str | None:
        content_type = self.header("content-type") or ""
        for part in content_type.split(";")[1:]:
            key, _, value = part.strip().partition("=")
            if key.lower() == "charset" and value:
                return value.strip().strip('"')
        return None


__all__ = ["BodyStream", "HeaderList", "HttpRequest", "HttpResponse"]

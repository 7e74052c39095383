# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers.

Every failure produced while executing a request is captured into the returned
Response as one of the FluentError subclasses below; terminal accessors raise it.
Callers branch either on the class (``isinstance(err, HTTPError)``) or on the
coarse not-OK kind via :func:`is_not_ok`.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class FluentError(Exception):
    """Base class for every error captured by a Client."""


class URLResolutionError(FluentError, ValueError):
    """The base URL or the request path could not be parsed."""


class SerializationError(FluentError):
    """The pending body could not be encoded as JSON."""


class DecodeError(FluentError):
    """The response body is not JSON of the requested shape."""


class StreamConsumedError(FluentError):
    """A terminal accessor was called on a Response whose body was already taken."""


class ContextCancelledError(FluentError):
    """The request context was cancelled before the round trip completed."""


class DeadlineExceededError(FluentError):
    """The request context deadline passed before the round trip completed."""


class TransportError(FluentError):
    """The transport failed to produce a response. The native error is ``__cause__``."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.category = category

    @classmethod
    def wrap(cls, exc: BaseException) -> TransportError:
        err = cls(f"{type(exc).__name__}: {exc}", categorize_exception(exc))
        err.__cause__ = exc
        return err


class NotOKError(FluentError):
    """Categorical kind for responses outside the 2xx range."""

    def __str__(self) -> str:
        return super().__str__() or "invalid status code"


ErrNotOK = NotOKError


class HTTPError(NotOKError):
    """A non-2xx response, with the buffered body."""

    def __init__(self, status_code: int, status: str, method: str, url: str, body: bytes = b""):
        super().__init__(status_code, status, method, url, body)
        self.status_code = status_code
        self.status = status
        self.method = method
        self.url = url
        self.body = body

    def __str__(self) -> str:
        if not self.body:
            return f"{self.method} {self.url}: {self.status}"
        return f"{self.method} {self.url}: {self.status}: {self.body.decode('utf-8', errors='replace')}"


def is_not_ok(err: BaseException | None) -> bool:
    """Return True when ``err`` or anything it was raised from is a NotOKError."""
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, NotOKError):
            return True
        seen.add(id(err))
        err = err.__cause__ or err.__context__
    return False


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if isinstance(exc, ContextCancelledError):
        return ErrorCategory.CANCELLED

    if isinstance(exc, (DeadlineExceededError, TimeoutError, httpx.TimeoutException)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "ContextCancelledError",
    "DeadlineExceededError",
    "DecodeError",
    "ErrNotOK",
    "ErrorCategory",
    "FluentError",
    "HTTPError",
    "NotOKError",
    "SerializationError",
    "StreamConsumedError",
    "TransportError",
    "URLResolutionError",
    "categorize_exception",
    "is_not_ok",
]

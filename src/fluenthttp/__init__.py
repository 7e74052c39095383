# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
fluenthttp package entrypoint.

A chainable builder for single outbound HTTP requests with JSON bodies. The
network round trip is delegated to an injectable Transport (httpx by default),
and every failure is captured into the returned Response instead of raised.
"""

from .client import Client
from .config import HttpSettings, load_http_settings
from .context import RequestContext, get_request_context, request_context
from .errors import (
    DecodeError,
    ErrNotOK,
    ErrorCategory,
    FluentError,
    HTTPError,
    NotOKError,
    SerializationError,
    StreamConsumedError,
    TransportError,
    URLResolutionError,
    is_not_ok,
)
from .http import (
    BodyStream,
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    StubTransport,
    Transport,
    default_transport,
)
from .log import setup_logging
from .response import Response
from .version import __version__


def new(transport: Transport | None = None) -> Client:
    """Create a Client with no base URL, using ``transport`` or the shared default."""
    return Client(transport)


__all__ = [
    "BodyStream",
    "Client",
    "DecodeError",
    "ErrNotOK",
    "ErrorCategory",
    "FluentError",
    "HTTPError",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxTransport",
    "NotOKError",
    "RequestContext",
    "Response",
    "SerializationError",
    "StreamConsumedError",
    "StubTransport",
    "Transport",
    "TransportError",
    "URLResolutionError",
    "default_transport",
    "get_request_context",
    "is_not_ok",
    "load_http_settings",
    "new",
    "request_context",
    "setup_logging",
    "__version__",
]

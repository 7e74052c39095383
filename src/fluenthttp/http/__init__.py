# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport layer exports."""

from .httpx_transport import HttpxTransport
from .models import BodyStream, HeaderList, HttpRequest, HttpResponse
from .stub import StubTransport, make_response
from .transport import Transport, create_default_transport, default_transport
from .url import join_path, resolve_url

__all__ = [
    "BodyStream",
    "HeaderList",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "StubTransport",
    "Transport",
    "create_default_transport",
    "default_transport",
    "join_path",
    "make_response",
    "resolve_url",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and the shared default instance."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse

if TYPE_CHECKING:
    from .httpx_transport import HttpxTransport


class Transport(Protocol):
    """
    Performs one network round trip.

    ``send`` returns the response with its body unread, or raises on
    transport-level failure (network error, timeout, cancelled context).
    HTTP error statuses are not failures at this level.
    """

    def send(self, request: HttpRequest) -> HttpResponse: ...


_default_transport: HttpxTransport | None = None
_default_lock = threading.Lock()


def create_default_transport(settings: HttpSettings | None = None) -> HttpxTransport:
    """Factory for a new httpx-backed transport."""
    from .httpx_transport import HttpxTransport

    return HttpxTransport(settings or load_http_settings())


def default_transport() -> HttpxTransport:
    """Return the process-wide transport used by clients that were not given one."""
    global _default_transport
    with _default_lock:
        if _default_transport is None:
            _default_transport = create_default_transport()
        return _default_transport


__all__ = ["Transport", "create_default_transport", "default_transport"]

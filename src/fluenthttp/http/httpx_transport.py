# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import httpx

from ..config import HttpSettings, load_http_settings
from ..context import RequestContext
from .models import BodyStream, HttpRequest, HttpResponse
from .transport import Transport

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """
    Synchronous httpx client wrapper. Safe to share between Client instances.

    The request context is checked before dispatch, once the response headers
    arrive and before every body chunk is handed out. A ``cancel()`` issued from
    another thread does not interrupt a blocking connect or read already in
    progress; the context deadline only bounds each httpx phase (connect, write,
    read, pool) through the per-request timeout, so a slow trickle can run past it
    until the next chunk boundary.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def send(self, request: HttpRequest) -> HttpResponse:
        ctx = request.context
        ctx.check()

        headers = list(request.headers)
        if request.header("user-agent") is None:
            headers.append(("User-Agent", self.settings.user_agent))

        timeout = ctx.remaining()
        if timeout is None:
            timeout = self.settings.timeout

        outbound = self._client.build_request(
            request.method,
            request.url,
            headers=headers,
            content=request.body,
            timeout=timeout,
        )
        resp = self._client.send(outbound, stream=True, follow_redirects=self.settings.allow_redirects)
        try:
            ctx.check()
        except Exception:
            resp.close()
            raise

        logger.debug("%s %s -> %s", request.method, request.url, resp.status_code)
        return HttpResponse(
            status_code=resp.status_code,
            reason=resp.reason_phrase,
            headers=list(resp.headers.multi_items()),
            stream=BodyStream(_checked_chunks(resp.iter_bytes(), ctx), close=resp.close),
            url=str(resp.url),
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _checked_chunks(chunks: Iterator[bytes], ctx: RequestContext) -> Iterator[bytes]:
    for chunk in chunks:
        ctx.check()
        yield chunk


__all__ = ["HttpxTransport"]

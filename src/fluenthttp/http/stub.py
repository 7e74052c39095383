# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory Transport for tests and offline use."""

from __future__ import annotations

from collections.abc import Callable
from http import HTTPStatus

from .models import BodyStream, HttpRequest, HttpResponse
from .transport import Transport

Handler = Callable[[HttpRequest], HttpResponse]


def make_response(
    status_code: int = 200,
    body: bytes | str = b"",
    *,
    headers: list[tuple[str, str]] | None = None,
    reason: str | None = None,
    url: str | None = None,
) -> HttpResponse:
    """Build an HttpResponse with a fresh body stream."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    if reason is None:
        try:
            reason = HTTPStatus(status_code).phrase
        except ValueError:
            reason = ""
    return HttpResponse(
        status_code=status_code,
        reason=reason,
        headers=list(headers or []),
        stream=BodyStream.from_bytes(body),
        url=url,
    )


class StubTransport(Transport):
    """Deterministic, programmable Transport. Records every request it receives."""

    def __init__(self, handler: Handler | None = None):
        self._routes: dict[str, Handler] = {}
        self._handler = handler
        self.requests: list[HttpRequest] = []

    def add(
        self,
        url: str,
        status_code: int = 200,
        body: bytes | str = b"",
        *,
        headers: list[tuple[str, str]] | None = None,
        reason: str | None = None,
    ) -> StubTransport:
        """Answer ``url`` with a canned response; a fresh body is produced per call."""
        self._routes[url] = lambda request: make_response(
            status_code, body, headers=headers, reason=reason, url=request.url
        )
        return self

    def fail(self, url: str, exc: BaseException) -> StubTransport:
        """Raise ``exc`` for every request to ``url``."""

        def _raise(request: HttpRequest) -> HttpResponse:
            raise exc

        self._routes[url] = _raise
        return self

    def route(self, url: str, handler: Handler) -> StubTransport:
        self._routes[url] = handler
        return self

    def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        request.context.check()
        handler = self._routes.get(request.url, self._handler)
        if handler is None:
            return make_response(404, b"", url=request.url)
        return handler(request)

    @property
    def last_request(self) -> HttpRequest | None:
        return self.requests[-1] if self.requests else None


__all__ = ["StubTransport", "make_response"]

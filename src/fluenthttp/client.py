# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Chainable request builder."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from .context import RequestContext, get_request_context
from .errors import FluentError, HTTPError, SerializationError, TransportError
from .http.models import HeaderList, HttpRequest, HttpResponse
from .http.transport import Transport, default_transport
from .http.url import resolve_url
from .response import Response

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class Client:
    """
    Fluent HTTP client with a base URL, query parameters, headers and a JSON body.

    Configuration methods return the client so calls can be chained::

        resp = Client().base_url("https://api.example.com").query("userId", "1").get("/posts")
        posts = resp.into(list[Post])

    Query parameters and headers accumulate until ``reset()``. The body is
    dropped after a successful (2xx) round trip and kept otherwise, so a failed
    call can simply be repeated. A Client is not thread-safe; use one per thread.
    """

    def __init__(self, transport: Transport | None = None):
        self._base_url = ""
        self._params: list[tuple[str, str]] = []
        self._headers: HeaderList = []
        self._transport = transport
        self._body: Any = None

    @property
    def base(self) -> str:
        return self._base_url

    @property
    def params(self) -> list[tuple[str, str]]:
        return list(self._params)

    @property
    def headers(self) -> HeaderList:
        return list(self._headers)

    @property
    def pending_body(self) -> Any:
        return self._body

    def base_url(self, url: str) -> Client:
        """Set the base URL. Without one, paths given to get/post must be absolute URLs."""
        self._base_url = url
        return self

    def query(self, key: str, value: str) -> Client:
        self._params.append((key, str(value)))
        return self

    def header(self, name: str, value: str) -> Client:
        self._headers.append((name, value))
        return self

    def transport(self, transport: Transport) -> Client:
        """Use a custom transport (timeouts, proxies, test doubles)."""
        self._transport = transport
        return self

    def body(self, value: Any) -> Client:
        """Set a value to send as JSON with the next request."""
        self._body = value
        return self

    def reset(self) -> Client:
        """Drop query parameters, headers and body. Base URL and transport are kept."""
        self._params = []
        self._headers = []
        self._body = None
        return self

    def get(self, path: str, ctx: RequestContext | None = None) -> Response:
        return self.do("GET", path, ctx)

    def post(self, path: str, ctx: RequestContext | None = None) -> Response:
        return self.do("POST", path, ctx)

    def put(self, path: str, ctx: RequestContext | None = None) -> Response:
        return self.do("PUT", path, ctx)

    def patch(self, path: str, ctx: RequestContext | None = None) -> Response:
        return self.do("PATCH", path, ctx)

    def delete(self, path: str, ctx: RequestContext | None = None) -> Response:
        return self.do("DELETE", path, ctx)

    def head(self, path: str, ctx: RequestContext | None = None) -> Response:
        return self.do("HEAD", path, ctx)

    def do(self, method: str, path: str, ctx: RequestContext | None = None) -> Response:
        """
        Execute one request and capture the outcome.

        Never raises for request failures: URL, serialization, transport and
        non-2xx errors are all returned inside the Response.
        """
        try:
            return Response.success(self._execute(method.upper(), path, ctx or get_request_context()))
        except FluentError as err:
            return Response.failure(err)

    def _execute(self, method: str, path: str, ctx: RequestContext) -> HttpResponse:
        url = resolve_url(self._base_url, path, self._params)

        payload: bytes | None = None
        if self._body is not None:
            payload = _encode_json(self._body)

        request = HttpRequest(method=method, url=url, context=ctx, body=payload)
        if payload is not None and not any(name.lower() == "content-type" for name, _ in self._headers):
            request.headers.append(("Content-Type", JSON_CONTENT_TYPE))
        request.headers.extend(self._headers)

        transport = self._transport or default_transport()
        logger.debug("%s %s", method, url)
        try:
            ctx.check()
            resp = transport.send(request)
        except Exception as exc:  # noqa: BLE001
            logger.debug("%s %s failed: %s", method, url, exc)
            raise TransportError.wrap(exc) from exc

        if not 200 <= resp.status_code < 300:
            with resp.stream as stream:
                try:
                    data = stream.read()
                except Exception as exc:  # noqa: BLE001
                    raise TransportError.wrap(exc) from exc
            logger.debug("%s %s returned %s", method, url, resp.status)
            raise HTTPError(resp.status_code, resp.status, method, url, data)

        self._body = None
        return resp


def _encode_json(value: Any) -> bytes:
    try:
        return json.dumps(to_jsonable_python(value), allow_nan=False, separators=(",", ":")).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise SerializationError(f"cannot encode body as JSON: {exc}") from exc


__all__ = ["Client", "JSON_CONTENT_TYPE"]

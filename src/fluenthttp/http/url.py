# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL resolution for Client requests."""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urlencode

import httpx

from ..errors import URLResolutionError


def _parse_absolute(raw: str, what: str) -> httpx.URL:
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise URLResolutionError(f"invalid {what}: {exc}") from exc
    if not url.scheme or not url.host:
        raise URLResolutionError(f"invalid {what}: {raw!r} is not an absolute URL")
    return url


def join_path(base_path: str, path: str) -> str:
    """
    Join two URL paths with exactly one slash between them.

    Example:
      join_path("/v1/", "/posts") -> "/v1/posts"
    """
    return base_path.removesuffix("/") + "/" + path.removeprefix("/")


def resolve_url(base_url: str | None, path: str, params: Sequence[tuple[str, str]] = ()) -> str:
    """
    Build the final request URL.

    Without a base URL, ``path`` must be absolute; ``params`` are appended, in the
    order they were added, after any query parameters it already carries. With a
    base URL, ``path`` is joined onto the base path and the query string is
    exactly ``params``: a query string or fragment on ``path`` is dropped.
    """
    if not base_url:
        url = _parse_absolute(path, "URL")
        if params:
            existing = url.query.decode("ascii")
            encoded = urlencode(list(params))
            url = url.copy_with(query=(f"{existing}&{encoded}" if existing else encoded).encode("ascii"))
        return str(url)

    base = _parse_absolute(base_url, "base URL")
    path_only = str(path).split("#", 1)[0].split("?", 1)[0]
    query = urlencode(list(params)).encode("ascii") or None
    try:
        url = base.copy_with(path=join_path(base.path, path_only), query=query)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise URLResolutionError(f"invalid path {path!r}: {exc}") from exc
    return str(url)


__all__ = ["join_path", "resolve_url"]

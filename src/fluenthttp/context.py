# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-request cancellation and deadline context.

A RequestContext travels with every HttpRequest so transports can bound the
round trip. Execution methods accept one explicitly; when omitted, the ambient
context installed with ``request_context()`` is used, falling back to a
background context that never expires.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace

from .errors import ContextCancelledError, DeadlineExceededError


@dataclass(frozen=True)
class RequestContext:
    timeout: float | None = None
    deadline: float | None = None
    cancel_event: threading.Event | None = field(default=None, compare=False)

    @classmethod
    def background(cls) -> RequestContext:
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> RequestContext:
        """Context whose deadline is ``seconds`` from now (monotonic clock)."""
        return cls(timeout=seconds, deadline=time.monotonic() + seconds)

    def with_cancel(self) -> RequestContext:
        """Copy of this context that can be cancelled with ``cancel()``."""
        return replace(self, cancel_event=threading.Event())

    def cancel(self) -> None:
        if self.cancel_event is None:
            raise RuntimeError("context is not cancellable; derive one with with_cancel()")
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """Raise if the context is cancelled or past its deadline."""
        if self.cancelled:
            raise ContextCancelledError("context canceled")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise DeadlineExceededError("context deadline exceeded")


_current_request_context: ContextVar[RequestContext | None] = ContextVar("fluenthttp_request_context", default=None)


def get_request_context() -> RequestContext:
    """Return the current ambient request context."""
    return _current_request_context.get() or RequestContext.background()


@contextmanager
def request_context(ctx: RequestContext | None = None, *, timeout: float | None = None) -> Iterator[RequestContext]:
    """
    Install an ambient RequestContext for the duration of the block.

    Either pass a ready context or a ``timeout`` in seconds.
    """
    if ctx is None:
        ctx = RequestContext.with_timeout(timeout) if timeout is not None else RequestContext.background()
    token = _current_request_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_request_context.reset(token)


__all__ = ["RequestContext", "get_request_context", "request_context"]

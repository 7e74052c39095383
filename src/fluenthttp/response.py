# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Result of a Client execution: a live response or a captured error."""

from __future__ import annotations

from typing import Any, TypeVar, cast, overload

from pydantic import TypeAdapter, ValidationError

from .errors import DecodeError, FluentError, StreamConsumedError, TransportError
from .http.models import BodyStream, HeaderList, HttpResponse

T = TypeVar("T")


class Response:
    """
    Holds exactly one of a live HttpResponse or a FluentError.

    ``raw()``, ``text()``, ``body_stream()`` and ``into()`` are terminal: the
    body can be taken once. Each of them raises the captured error first.
    """

    __slots__ = ("_resp", "_err", "_consumed")

    def __init__(self, resp: HttpResponse | None = None, err: FluentError | None = None):
        if (resp is None) == (err is None):
            raise ValueError("Response needs exactly one of resp or err")
        self._resp = resp
        self._err = err
        self._consumed = False

    @classmethod
    def success(cls, resp: HttpResponse) -> Response:
        return cls(resp=resp)

    @classmethod
    def failure(cls, err: FluentError) -> Response:
        return cls(err=err)

    @property
    def error(self) -> FluentError | None:
        return self._err

    @property
    def ok(self) -> bool:
        return self._err is None

    @property
    def status_code(self) -> int | None:
        return self._resp.status_code if self._resp is not None else None

    @property
    def headers(self) -> HeaderList:
        return list(self._resp.headers) if self._resp is not None else []

    def _take(self) -> HttpResponse:
        if self._err is not None:
            raise self._err
        if self._consumed:
            raise StreamConsumedError("response body was already consumed")
        self._consumed = True
        return cast(HttpResponse, self._resp)

    def body_stream(self) -> BodyStream:
        """Hand over the live body. The caller is responsible for closing it."""
        return self._take().stream

    def raw(self) -> bytes:
        with self._take().stream as stream:
            try:
                return stream.read()
            except Exception as exc:  # noqa: BLE001
                raise TransportError.wrap(exc) from exc

    def text(self, encoding: str | None = None) -> str:
        charset = encoding or (self._resp.charset if self._resp is not None else None) or "utf-8"
        data = self.raw()
        try:
            return data.decode(charset, errors="replace")
        except LookupError:
            return data.decode("utf-8", errors="replace")

    @overload
    def into(self, type_: type[T]) -> T: ...

    @overload
    def into(self, type_: Any) -> Any: ...

    def into(self, type_: Any) -> Any:
        """
        Decode the JSON body into ``type_``.

        Anything pydantic can validate works: dataclasses, TypedDicts, models and
        builtin containers such as ``list[Post]``.
        """
        data = self.raw()
        try:
            return TypeAdapter(type_).validate_json(data)
        except ValidationError as exc:
            raise DecodeError(f"cannot decode response into {_type_name(type_)}: {exc}") from exc


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or repr(type_)


__all__ = ["Response"]

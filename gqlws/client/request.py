"""Request construction through an ordered list of mutator options.

Client-wide options apply first, then per-call options, each receiving the
same mutable :class:`Request` in turn.
"""

from __future__ import annotations

import base64
from typing import Any
from collections.abc import Callable, Iterable

from gqlws.errors import EncodeError
from gqlws.config.protocol import CONTENT_TYPE_JSON
from gqlws.protocol.messages import Request

Option = Callable[[Request], None]


def var(name: str, value: Any) -> Option:
    def _apply(request: Request) -> None:
        request.variables[name] = value

    return _apply


def operation(name: str) -> Option:
    def _apply(request: Request) -> None:
        request.operation_name = name

    return _apply


def path(url: str) -> Option:
    def _apply(request: Request) -> None:
        request.http.path = url if url.startswith("/") else f"/{url}"

    return _apply


def add_header(key: str, value: str) -> Option:
    def _apply(request: Request) -> None:
        request.http.set_header(key, value)

    return _apply


def basic_auth(username: str, password: str) -> Option:
    token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return add_header("Authorization", f"Basic {token}")


def add_cookie(name: str, value: str) -> Option:
    def _apply(request: Request) -> None:
        request.http.cookies[name] = value

    return _apply


def build_request(
    query: str,
    client_options: Iterable[Option] = (),
    call_options: Iterable[Option] = (),
) -> Request:
    request = Request(query=query)
    for option in client_options:
        option(request)
    for option in call_options:
        option(request)

    content_type = request.http.header("Content-Type") or ""
    if content_type.split(";")[0].strip().lower() != CONTENT_TYPE_JSON:
        raise EncodeError(f"unsupported encoding {content_type!r}")
    return request


__all__ = [
    "Option",
    "add_cookie",
    "add_header",
    "basic_auth",
    "build_request",
    "operation",
    "path",
    "var",
]

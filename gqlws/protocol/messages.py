"""Request/response data model carried inside frames."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass

from gqlws.config.protocol import CONTENT_TYPE_JSON


def _default_headers() -> dict[str, str]:
    return {"Content-Type": CONTENT_TYPE_JSON}


@dataclass(slots=True)
class HttpParts:
    """HTTP-level parts of an outgoing request. Never serialized into the body."""

    method: str = "POST"
    path: str = "/"
    headers: dict[str, str] = field(default_factory=_default_headers)
    cookies: dict[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def set_header(self, name: str, value: str) -> None:
        lowered = name.lower()
        for key in [k for k in self.headers if k.lower() == lowered]:
            del self.headers[key]
        self.headers[name] = value

    def header_items(self) -> list[tuple[str, str]]:
        items = list(self.headers.items())
        if self.cookies:
            items.append(("Cookie", "; ".join(f"{k}={v}" for k, v in self.cookies.items())))
        return items


@dataclass(slots=True)
class Request:
    """An outgoing GraphQL request, built once and serialized exactly once."""

    query: str
    variables: dict[str, Any] = field(default_factory=dict)
    operation_name: str | None = None
    http: HttpParts = field(default_factory=HttpParts, compare=False)


@dataclass(slots=True)
class Response:
    """A GraphQL-layer response, one per data frame or HTTP round-trip."""

    data: Any = None
    errors: Any = None
    extensions: dict[str, Any] | None = None


__all__ = ["HttpParts", "Request", "Response"]

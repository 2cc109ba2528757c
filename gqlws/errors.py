"""Error types for the subscription transport and request/response client."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass


class GqlwsError(Exception):
    """Base class for every error raised by gqlws."""


@dataclass(slots=True, eq=False)
class DialError(GqlwsError):
    """The bidirectional frame stream could not be established."""

    detail: str

    def __str__(self) -> str:
        return f"dial: {self.detail}"


@dataclass(slots=True, eq=False)
class HandshakeError(GqlwsError):
    """The init/ack/keepalive preamble did not complete."""

    stage: str
    got: str | None = None
    detail: str = ""

    def __str__(self) -> str:
        if self.got is not None:
            return f"handshake {self.stage}: unexpected frame type {self.got!r}"
        return f"handshake {self.stage}: {self.detail or 'failed'}"


@dataclass(slots=True, eq=False)
class EncodeError(GqlwsError):
    """A request or init payload could not be serialized."""

    detail: str

    def __str__(self) -> str:
        return f"encode: {self.detail}"


@dataclass(slots=True, eq=False)
class ProtocolViolation(GqlwsError):
    """A frame arrived that is invalid for the current state."""

    got: str | None
    detail: str = ""

    def __str__(self) -> str:
        msg = f"protocol violation: got {self.got!r}"
        return f"{msg} ({self.detail})" if self.detail else msg


@dataclass(slots=True, eq=False)
class MalformedFrame(ProtocolViolation):
    """The frame is not parseable or carries no recognized type."""


@dataclass(slots=True, eq=False)
class RemoteError(GqlwsError):
    """Server-reported error, from a data frame's errors or an error frame."""

    raw: Any
    text: str
    entries: tuple[Any, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return self.text


@dataclass(slots=True, eq=False)
class DecodeError(GqlwsError):
    """Payload data did not match the destination shape."""

    detail: str
    remote: RemoteError | None = None

    def __str__(self) -> str:
        return f"decode: {self.detail}"


@dataclass(slots=True, eq=False)
class ReadError(GqlwsError):
    """The underlying transport failed while reading a frame."""

    detail: str

    def __str__(self) -> str:
        return f"read: {self.detail}"


@dataclass(slots=True, eq=False)
class ReadTimeoutError(ReadError):
    """No frame arrived before the read deadline; the stream stays usable."""


@dataclass(slots=True, eq=False)
class SendError(GqlwsError):
    """The underlying transport failed while writing a frame."""

    detail: str

    def __str__(self) -> str:
        return f"send: {self.detail}"


@dataclass(slots=True, eq=False)
class SubscriptionStateError(GqlwsError):
    """The subscription handle is in a terminal state."""

    state: str

    def __str__(self) -> str:
        return f"subscription is {self.state}"


@dataclass(slots=True, eq=False)
class HTTPStatusError(GqlwsError):
    """The handler answered a request/response call with an error status."""

    status: int
    body: str

    def __str__(self) -> str:
        return f"http {self.status}: {self.body}"


__all__ = [
    "DecodeError",
    "DialError",
    "EncodeError",
    "GqlwsError",
    "HTTPStatusError",
    "HandshakeError",
    "MalformedFrame",
    "ProtocolViolation",
    "ReadError",
    "ReadTimeoutError",
    "RemoteError",
    "SendError",
    "SubscriptionStateError",
]

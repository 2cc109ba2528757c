"""Adapt raw remote error payloads into structured, inspectable errors."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass

import orjson

from gqlws.errors import RemoteError


@dataclass(frozen=True, slots=True)
class RemoteErrorEntry:
    message: str
    path: tuple[str | int, ...] = ()
    locations: tuple[dict[str, Any], ...] = ()
    extensions: dict[str, Any] = field(default_factory=dict)


def has_errors(raw: Any) -> bool:
    """True when a response's errors field reports at least one error."""
    if raw is None:
        return False
    if isinstance(raw, (list, tuple, dict, str)):
        return len(raw) > 0
    return True


def _raw_text(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return orjson.dumps(raw).decode("utf-8")
    except orjson.JSONEncodeError:
        return repr(raw)


def _entry_from_item(item: Any) -> RemoteErrorEntry:
    if not isinstance(item, dict):
        return RemoteErrorEntry(message=_raw_text(item))
    message = item.get("message")
    path = item.get("path")
    locations = item.get("locations")
    extensions = item.get("extensions")
    return RemoteErrorEntry(
        message=message if isinstance(message, str) else _raw_text(item),
        path=tuple(path) if isinstance(path, list) else (),
        locations=tuple(loc for loc in locations if isinstance(loc, dict)) if isinstance(locations, list) else (),
        extensions=dict(extensions) if isinstance(extensions, dict) else {},
    )


def parse_error_entries(raw: Any) -> tuple[RemoteErrorEntry, ...]:
    if raw is None:
        return ()
    if isinstance(raw, list):
        return tuple(_entry_from_item(item) for item in raw)
    return (_entry_from_item(raw),)


def remote_error_from_errors(raw: Any) -> RemoteError:
    """Wrap a response's ``errors`` value; ``raw`` is kept exactly as received."""
    return RemoteError(raw=raw, text=_raw_text(raw), entries=parse_error_entries(raw))


def remote_error_from_frame(payload: Any, raw_text: str | None = None) -> RemoteError:
    """Wrap a standalone error frame; the payload text is the message verbatim.

    A JSON string payload is its own message. Otherwise ``raw_text``, the
    payload's source text from the frame, is used when the caller has it.
    """
    if isinstance(payload, str) or raw_text is None:
        text = _raw_text(payload)
    else:
        text = raw_text
    return RemoteError(raw=payload, text=text, entries=parse_error_entries(payload))


__all__ = [
    "RemoteErrorEntry",
    "has_errors",
    "parse_error_entries",
    "remote_error_from_errors",
    "remote_error_from_frame",
]

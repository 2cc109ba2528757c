
"""Strict decode of response data into a caller-owned destination.

The destination is either a ``dict`` (cleared, then filled) or a dataclass
instance. Keys match a field's name or its ``metadata["json"]``. A nested
dataclass instance already held by a field is filled in place; every other
value is validated against the field's annotation with pydantic, forbidding
unknown keys at every nesting level. Every field that validates is written
before ``DecodeError`` reports the keys and values that did not.
"""

from __future__ import annotations

import logging
import functools
from typing import Any, get_type_hints
from dataclasses import fields, is_dataclass, FrozenInstanceError

from pydantic import BaseModel, ConfigDict, ValidationError, create_model

from gqlws.errors import DecodeError
from gqlws.protocol.remote import has_errors, remote_error_from_errors
from gqlws.protocol.messages import Response

logger = logging.getLogger(__name__)

_STRICT_CONFIG = ConfigDict(extra="forbid", arbitrary_types_allowed=True)


@functools.lru_cache(maxsize=256)
def _value_model(annotation: Any) -> type[BaseModel]:
    # Stdlib dataclasses nested under this model inherit its config.
    return create_model("DecodedValue", __config__=_STRICT_CONFIG, value=(annotation, ...))


@functools.lru_cache(maxsize=128)
def _field_annotations(cls: type) -> dict[str, tuple[str, Any]]:
    hints = get_type_hints(cls)
    return {f.metadata.get("json", f.name): (f.name, hints.get(f.name, Any)) for f in fields(cls)}


def _describe(key: str, exc: ValidationError) -> list[str]:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in (key, *err["loc"][1:]))
        problems.append(f"{loc}: {err['msg']}")
    return problems


def _populate_dataclass(source: dict[str, Any], target: Any, prefix: str = "") -> list[str]:
    problems: list[str] = []
    by_key = _field_annotations(type(target))
    for key, value in source.items():
        match = by_key.get(key)
        if match is None:
            problems.append(f"{prefix}{key}: unused key")
            continue
        attr, annotation = match
        current = getattr(target, attr, None)
        nested = isinstance(value, dict) and isinstance(annotation, type) and isinstance(current, annotation)
        if nested and is_dataclass(current):
            problems.extend(_populate_dataclass(value, current, f"{prefix}{key}."))
            continue
        try:
            validated = _value_model(annotation).model_validate({"value": value}).value
        except ValidationError as exc:
            problems.extend(_describe(f"{prefix}{key}", exc))
            continue
        try:
            setattr(target, attr, validated)
        except FrozenInstanceError as exc:
            raise DecodeError(f"{prefix}{key}: destination is frozen") from exc
    return problems


def unpack(data: Any, into: Any) -> None:
    if into is None:
        return
    if data is None:
        if isinstance(into, dict):
            into.clear()
        return
    if not isinstance(data, dict):
        raise DecodeError(f"<root>: expected object, got {type(data).__name__}")

    if isinstance(into, dict):
        into.clear()
        into.update(data)
        return
    if not is_dataclass(into) or isinstance(into, type):
        raise DecodeError(f"<root>: unsupported destination {type(into).__name__}")

    problems = _populate_dataclass(data, into)
    if problems:
        raise DecodeError("; ".join(sorted(problems)))


def unpack_response(response: Response, into: Any) -> Response:
    """Decode first, then classify: decode failure wins, then remote errors."""
    remote = remote_error_from_errors(response.errors) if has_errors(response.errors) else None
    try:
        unpack(response.data, into)
    except DecodeError as exc:
        exc.remote = remote
        logger.debug("decode failed (remote errors present: %s): %s", remote is not None, exc)
        raise
    if remote is not None:
        raise remote
    return response


__all__ = ["unpack", "unpack_response"]

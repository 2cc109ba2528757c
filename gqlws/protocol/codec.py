"""Wire codec for graphql-ws frames and the start payload."""

from __future__ import annotations

import json
from typing import Any
from dataclasses import dataclass

import orjson

from gqlws.errors import DecodeError, EncodeError, MalformedFrame
from gqlws.protocol.messages import Request, Response
from gqlws.config.protocol import (
    GQL_ERROR,
    FRAME_KEY_ID,
    FRAME_KEY_TYPE,
    KNOWN_FRAME_TYPES,
    FRAME_KEY_PAYLOAD,
    REQUEST_KEY_QUERY,
    RESPONSE_KEY_DATA,
    RESPONSE_KEY_ERRORS,
    REQUEST_KEY_VARIABLES,
    RESPONSE_KEY_EXTENSIONS,
    REQUEST_KEY_OPERATION_NAME,
)

_JSON_WS = " \t\n\r"
_SCANNER = json.JSONDecoder()


@dataclass(frozen=True, slots=True)
class Frame:
    type: str
    id: str | None = None
    payload: Any = None
    raw_payload: str | None = None


def _has_float(value: Any) -> bool:
    if isinstance(value, float):
        return True
    if isinstance(value, dict):
        return any(_has_float(item) for item in value.values())
    if isinstance(value, list):
        return any(_has_float(item) for item in value)
    return False


def loads_exact(raw: str | bytes) -> Any:
    """Parse JSON with orjson, keeping integers wider than 64 bits exact.

    orjson reads such integers as floats, so any document that decoded to a
    float is parsed again with the stdlib decoder.
    """
    value = orjson.loads(raw)
    if _has_float(value):
        return json.loads(raw)
    return value


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _JSON_WS:
        pos += 1
    return pos


def member_source(text: str, key: str) -> str | None:
    """Source text of a top-level object member's value; the last duplicate wins.

    ``text`` must already be known to be a valid JSON object.
    """
    pos = _skip_ws(text, 0)
    if text[pos : pos + 1] != "{":
        return None
    pos = _skip_ws(text, pos + 1)
    if text[pos : pos + 1] == "}":
        return None
    found = None
    while True:
        name, pos = _SCANNER.raw_decode(text, pos)
        pos = _skip_ws(text, _skip_ws(text, pos) + 1)
        _, end = _SCANNER.raw_decode(text, pos)
        if name == key:
            found = text[pos:end]
        pos = _skip_ws(text, end)
        if text[pos] == "}":
            return found
        pos = _skip_ws(text, pos + 1)


def encode_frame(msg_type: str, *, frame_id: str | None = None, payload: Any = None) -> str:
    """Serialize one frame, omitting absent optional fields.

    A ``bytes`` payload is treated as already-serialized JSON and embedded as is.
    """
    frame: dict[str, Any] = {FRAME_KEY_TYPE: msg_type}
    if frame_id:
        frame[FRAME_KEY_ID] = frame_id
    if payload is not None:
        frame[FRAME_KEY_PAYLOAD] = orjson.Fragment(payload) if isinstance(payload, bytes) else payload
    try:
        return orjson.dumps(frame).decode("utf-8")
    except orjson.JSONEncodeError as exc:
        raise EncodeError(f"{msg_type} frame: {exc}") from exc


def decode_frame(raw: str | bytes) -> Frame:
    """Parse one frame. ``error`` frames also keep their payload's source text."""
    try:
        msg = loads_exact(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedFrame(None, f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise MalformedFrame(None, "frame must be a JSON object")

    msg_type = msg.get(FRAME_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type:
        raise MalformedFrame(None, "frame missing non-empty 'type'")
    if msg_type not in KNOWN_FRAME_TYPES:
        raise MalformedFrame(msg_type, "unrecognized frame type")

    frame_id = msg.get(FRAME_KEY_ID)
    if frame_id is not None and not isinstance(frame_id, str):
        frame_id = str(frame_id)

    raw_payload = None
    if msg_type == GQL_ERROR and FRAME_KEY_PAYLOAD in msg:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        raw_payload = member_source(text, FRAME_KEY_PAYLOAD)

    return Frame(type=msg_type, id=frame_id, payload=msg.get(FRAME_KEY_PAYLOAD), raw_payload=raw_payload)


def request_to_payload(request: Request) -> dict[str, Any]:
    payload: dict[str, Any] = {REQUEST_KEY_QUERY: request.query}
    if request.variables:
        payload[REQUEST_KEY_VARIABLES] = request.variables
    if request.operation_name:
        payload[REQUEST_KEY_OPERATION_NAME] = request.operation_name
    return payload


def encode_request(request: Request) -> bytes:
    try:
        return orjson.dumps(request_to_payload(request))
    except orjson.JSONEncodeError as exc:
        raise EncodeError(f"request: {exc}") from exc


def decode_request(payload: Any) -> Request:
    if isinstance(payload, (bytes, str)):
        try:
            payload = loads_exact(payload)
        except orjson.JSONDecodeError as exc:
            raise DecodeError(f"request: {exc}") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get(REQUEST_KEY_QUERY), str):
        raise DecodeError("request: payload must be an object with a string 'query'")
    return Request(
        query=payload[REQUEST_KEY_QUERY],
        variables=dict(payload.get(REQUEST_KEY_VARIABLES) or {}),
        operation_name=payload.get(REQUEST_KEY_OPERATION_NAME) or None,
    )


def decode_response(payload: Any) -> Response:
    """Split a data payload or HTTP body into data/errors/extensions."""
    if not isinstance(payload, dict):
        raise DecodeError(f"response payload must be an object, got {type(payload).__name__}")
    extensions = payload.get(RESPONSE_KEY_EXTENSIONS)
    if extensions is not None and not isinstance(extensions, dict):
        raise DecodeError("response 'extensions' must be an object")
    return Response(
        data=payload.get(RESPONSE_KEY_DATA),
        errors=payload.get(RESPONSE_KEY_ERRORS),
        extensions=extensions,
    )


__all__ = [
    "Frame",
    "decode_frame",
    "decode_request",
    "decode_response",
    "encode_frame",
    "encode_request",
    "loads_exact",
    "member_source",
    "request_to_payload",
]

"""The connection_init -> connection_ack -> ka preamble."""

from __future__ import annotations

import time
import logging
from typing import Any

from websockets.exceptions import WebSocketException

from gqlws.errors import MalformedFrame, HandshakeError
from gqlws.protocol.codec import Frame, decode_frame, encode_frame
from gqlws.client.transport import FrameStream
from gqlws.config.protocol import (
    STAGE_ACK,
    STAGE_INIT,
    STAGE_KEEPALIVE,
    GQL_CONNECTION_ACK,
    GQL_CONNECTION_INIT,
    GQL_CONNECTION_KEEP_ALIVE,
)

logger = logging.getLogger(__name__)


def _remaining(deadline: float | None, stage: str) -> float | None:
    if deadline is None:
        return None
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise HandshakeError(stage, detail="deadline exceeded") from TimeoutError()
    return remaining


def _recv_frame(stream: FrameStream, stage: str, deadline: float | None) -> Frame:
    timeout = _remaining(deadline, stage)
    try:
        raw = stream.recv(timeout=timeout)
    except TimeoutError as exc:
        raise HandshakeError(stage, detail="timed out waiting for frame") from exc
    except (OSError, WebSocketException) as exc:
        raise HandshakeError(stage, detail=str(exc) or type(exc).__name__) from exc
    try:
        frame = decode_frame(raw)
    except MalformedFrame as exc:
        raise HandshakeError(stage, got=exc.got, detail=exc.detail) from exc
    logger.debug("handshake: recv stage=%s type=%s", stage, frame.type)
    return frame


def _strict_preamble(stream: FrameStream, deadline: float | None) -> None:
    ack = _recv_frame(stream, STAGE_ACK, deadline)
    if ack.type != GQL_CONNECTION_ACK:
        raise HandshakeError(STAGE_ACK, got=ack.type)
    ka = _recv_frame(stream, STAGE_KEEPALIVE, deadline)
    if ka.type != GQL_CONNECTION_KEEP_ALIVE:
        raise HandshakeError(STAGE_KEEPALIVE, got=ka.type)


def _lenient_preamble(stream: FrameStream, deadline: float | None) -> None:
    # Keepalives may arrive before or after the ack; later ones are filtered
    # by the operation channel.
    while True:
        frame = _recv_frame(stream, STAGE_ACK, deadline)
        if frame.type == GQL_CONNECTION_KEEP_ALIVE:
            continue
        if frame.type != GQL_CONNECTION_ACK:
            raise HandshakeError(STAGE_ACK, got=frame.type)
        return


def perform_handshake(
    stream: FrameStream,
    init_payload: Any = None,
    *,
    timeout_s: float | None = None,
    strict: bool = True,
) -> None:
    """Run the preamble on a freshly opened stream.

    Raises ``EncodeError`` if ``init_payload`` cannot be serialized and
    ``HandshakeError`` for any transport failure, timeout or unexpected frame.
    """
    deadline = time.monotonic() + timeout_s if timeout_s else None

    message = encode_frame(GQL_CONNECTION_INIT, payload=init_payload)
    try:
        stream.send(message)
    except (OSError, WebSocketException) as exc:
        raise HandshakeError(STAGE_INIT, detail=str(exc) or type(exc).__name__) from exc

    if strict:
        _strict_preamble(stream, deadline)
    else:
        _lenient_preamble(stream, deadline)
    logger.debug("handshake: complete strict=%s", strict)


__all__ = ["perform_handshake"]

"""The start frame and the pull-based read loop of one subscription."""

from __future__ import annotations

import logging
from typing import Any

from websockets.exceptions import WebSocketException

from gqlws.errors import SendError, ReadError, ReadTimeoutError, ProtocolViolation
from gqlws.protocol.codec import decode_frame, encode_frame, decode_response
from gqlws.protocol.remote import remote_error_from_frame
from gqlws.client.unpack import unpack_response
from gqlws.client.transport import FrameStream
from gqlws.config.transport import DEFAULT_GQLWS_OPERATION_ID
from gqlws.protocol.messages import Response
from gqlws.config.protocol import GQL_DATA, GQL_ERROR, GQL_START, GQL_CONNECTION_KEEP_ALIVE

logger = logging.getLogger(__name__)


class OperationChannel:
    """Sends one ``start`` frame, then classifies frames on each pull.

    Not safe for concurrent use: the stream has one reader and one writer.
    """

    def __init__(
        self,
        stream: FrameStream,
        *,
        operation_id: str = DEFAULT_GQLWS_OPERATION_ID,
        read_timeout_s: float | None = None,
        skip_keepalives: bool = False,
    ) -> None:
        self._stream = stream
        self._operation_id = operation_id
        self._read_timeout_s = read_timeout_s
        self._skip_keepalives = skip_keepalives
        self._started = False

    @property
    def operation_id(self) -> str:
        return self._operation_id

    def start(self, request_body: bytes) -> None:
        if self._started:
            raise ProtocolViolation(GQL_START, "operation already started")
        message = encode_frame(GQL_START, frame_id=self._operation_id, payload=request_body)
        try:
            self._stream.send(message)
        except (OSError, WebSocketException) as exc:
            raise SendError(str(exc) or type(exc).__name__) from exc
        self._started = True
        logger.debug("channel: start sent id=%s", self._operation_id)

    def _recv(self) -> str | bytes:
        try:
            return self._stream.recv(timeout=self._read_timeout_s)
        except TimeoutError as exc:
            raise ReadTimeoutError(f"no frame within {self._read_timeout_s}s") from exc
        except (OSError, WebSocketException) as exc:
            raise ReadError(str(exc) or type(exc).__name__) from exc

    def read_next(self, into: Any) -> Response:
        """Block for the next data frame and decode its data into ``into``.

        Partial data is written to ``into`` even when the frame also reports
        errors; see ``unpack_response`` for the precedence of the two.
        """
        if not self._started:
            raise ProtocolViolation(None, "read before start")
        while True:
            frame = decode_frame(self._recv())
            logger.debug("channel: recv type=%s id=%s", frame.type, frame.id)

            if frame.type == GQL_DATA:
                return unpack_response(decode_response(frame.payload), into)
            if frame.type == GQL_ERROR:
                raise remote_error_from_frame(frame.payload, frame.raw_payload)
            if frame.type == GQL_CONNECTION_KEEP_ALIVE and self._skip_keepalives:
                continue
            raise ProtocolViolation(frame.type, "expected data message")


__all__ = ["OperationChannel"]

"""Consumer-facing subscription handle."""

from __future__ import annotations

import logging
from typing import Any
from contextlib import ExitStack
from collections.abc import Callable

from gqlws.errors import ReadError, ReadTimeoutError, SubscriptionStateError
from gqlws.state.settings import ClientSettings
from gqlws.client.channel import OperationChannel
from gqlws.client.handshake import perform_handshake
from gqlws.client.transport import FrameStream
from gqlws.protocol.messages import Response
from gqlws.state.subscription import SubscriptionState

logger = logging.getLogger(__name__)

# Opens the frame stream and registers everything it acquired on the stack.
OpenStream = Callable[[ExitStack], FrameStream]


class Subscription:
    def __init__(self) -> None:
        self._state = SubscriptionState.PENDING
        self._channel: OperationChannel | None = None
        self._resources: ExitStack | None = None
        self._released = False

    @property
    def state(self) -> SubscriptionState:
        return self._state

    @classmethod
    def establish(
        cls,
        open_stream: OpenStream,
        *,
        request_body: bytes,
        settings: ClientSettings,
        init_payload: Any = None,
    ) -> Subscription:
        """Open, handshake and start; returns a handle in the streaming state.

        Everything ``open_stream`` acquired is released before any setup
        error propagates.
        """
        handle = cls()
        handle._establish(open_stream, request_body, settings, init_payload)
        return handle

    def _establish(
        self,
        open_stream: OpenStream,
        request_body: bytes,
        settings: ClientSettings,
        init_payload: Any,
    ) -> None:
        with ExitStack() as stack:
            try:
                stream = open_stream(stack)
                self._state = SubscriptionState.HANDSHAKE_IN_FLIGHT
                perform_handshake(
                    stream,
                    init_payload,
                    timeout_s=settings.timeouts.handshake_timeout_s,
                    strict=settings.protocol.strict_handshake,
                )
                channel = OperationChannel(
                    stream,
                    operation_id=settings.protocol.operation_id,
                    read_timeout_s=settings.timeouts.read_timeout_s,
                    skip_keepalives=not settings.protocol.strict_handshake,
                )
                channel.start(request_body)
            except Exception as exc:
                self._state = SubscriptionState.FAILED
                logger.warning("subscription: setup failed: %s", exc)
                raise
            self._resources = stack.pop_all()
        self._channel = channel
        self._state = SubscriptionState.STREAMING
        logger.info("subscription: streaming id=%s", channel.operation_id)

    def next(self, into: Any) -> Response:
        if self._state.is_terminal or self._channel is None:
            raise SubscriptionStateError(self._state.value)
        try:
            return self._channel.read_next(into)
        except ReadTimeoutError:
            raise
        except ReadError as exc:
            self._state = SubscriptionState.FAILED
            logger.warning("subscription: read failed: %s", exc)
            raise

    def close(self) -> None:
        if self._released:
            return
        self._released = True
        if self._state is not SubscriptionState.FAILED:
            self._state = SubscriptionState.CLOSED
        if self._resources is not None:
            self._resources.close()
        logger.info("subscription: %s", self._state.value)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["OpenStream", "Subscription"]

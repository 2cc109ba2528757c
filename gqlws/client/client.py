"""GraphQL test client driving an ASGI handler over HTTP or graphql-ws."""

from __future__ import annotations

import logging
from typing import Any
from functools import partial
from contextlib import ExitStack

import orjson
from fastapi.testclient import TestClient

from gqlws.errors import DecodeError, HTTPStatusError
from gqlws.runtime import load_settings
from gqlws.state.settings import ClientSettings
from gqlws.protocol.codec import loads_exact, encode_request, decode_response
from gqlws.client.unpack import unpack_response
from gqlws.client.request import Option, build_request
from gqlws.client.transport import FrameStream, EphemeralServer, dial
from gqlws.protocol.messages import Request, Response
from gqlws.client.subscription import Subscription

logger = logging.getLogger(__name__)


class Client:
    """Client for testing GraphQL servers. Not for production use.

    ``handler`` is an ASGI application. Options given here apply to every
    request before the per-call options.
    """

    def __init__(self, handler: Any, *options: Option, settings: ClientSettings | None = None) -> None:
        self._handler = handler
        self._options = options
        self._settings = settings or load_settings()

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    def _new_request(self, query: str, options: tuple[Option, ...]) -> Request:
        return build_request(query, self._options, options)

    def _open_stream(self, request: Request, stack: ExitStack) -> FrameStream:
        timeouts = self._settings.timeouts
        protocol = self._settings.protocol
        server = stack.enter_context(EphemeralServer(self._handler, start_timeout_s=timeouts.server_start_timeout_s))
        stream = dial(
            server.url + request.http.path,
            request.http.header_items(),
            subprotocol=protocol.subprotocol,
            open_timeout_s=timeouts.open_timeout_s,
            max_size=protocol.max_message_bytes,
        )
        stack.callback(stream.close)
        return stream

    def websocket(self, query: str, *options: Option) -> Subscription:
        return self.websocket_with_payload(query, None, *options)

    def websocket_with_payload(self, query: str, init_payload: dict[str, Any] | None, *options: Option) -> Subscription:
        request = self._new_request(query, options)
        body = encode_request(request)
        return Subscription.establish(
            partial(self._open_stream, request),
            request_body=body,
            settings=self._settings,
            init_payload=init_payload,
        )

    def websocket_once(self, query: str, into: Any, *options: Option) -> Response:
        """Grab a single response from a subscription, then close it."""
        with self.websocket(query, *options) as subscription:
            return subscription.next(into)

    def raw_post(self, query: str, *options: Option) -> Response:
        """Run one request in-process and split the body without unpacking data."""
        request = self._new_request(query, options)
        body = encode_request(request)

        with TestClient(self._handler) as http:
            reply = http.request(
                request.http.method,
                request.http.path,
                content=body,
                headers=request.http.header_items(),
            )

        if reply.status_code >= 400:
            raise HTTPStatusError(reply.status_code, reply.text)
        try:
            payload = loads_exact(reply.content)
        except orjson.JSONDecodeError as exc:
            raise DecodeError(f"response body: {exc}") from exc
        logger.debug("post: status=%s path=%s", reply.status_code, request.http.path)
        return decode_response(payload)

    def post(self, query: str, into: Any, *options: Option) -> Response:
        return unpack_response(self.raw_post(query, *options), into)


__all__ = ["Client"]

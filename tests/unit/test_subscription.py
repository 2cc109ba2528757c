from __future__ import annotations

from typing import Any

import pytest

from gqlws.errors import (
    ReadError,
    SendError,
    DecodeError,
    RemoteError,
    HandshakeError,
    ReadTimeoutError,
    ProtocolViolation,
    SubscriptionStateError,
)
from gqlws.protocol.codec import encode_request
from gqlws.protocol.messages import Request
from gqlws.client.subscription import Subscription
from gqlws.state.subscription import SubscriptionState
from tests.fakes import KA, ACK, ScriptedOpener, ScriptedStream, data_frame, make_settings

BODY = encode_request(Request(query="subscription { x }", variables={"a": 1}))


def _establish(inbound: list[Any], **settings: Any) -> tuple[Subscription, ScriptedOpener]:
    opener = ScriptedOpener(ScriptedStream([ACK, KA, *inbound]))
    sub = Subscription.establish(opener, request_body=BODY, settings=make_settings(**settings))
    return sub, opener


def test_establish_streams_and_sends_start() -> None:
    sub, opener = _establish([])
    assert sub.state is SubscriptionState.STREAMING
    assert opener.stream.sent_frames == [
        {"type": "connection_init"},
        {"type": "start", "id": "1", "payload": {"query": "subscription { x }", "variables": {"a": 1}}},
    ]
    assert opener.listener_closes == 0


def test_establish_passes_init_payload_and_operation_id() -> None:
    opener = ScriptedOpener(ScriptedStream([ACK, KA]))
    Subscription.establish(
        opener,
        request_body=BODY,
        settings=make_settings(operation_id="sub-7"),
        init_payload={"token": "t"},
    )
    init, start = opener.stream.sent_frames
    assert init == {"type": "connection_init", "payload": {"token": "t"}}
    assert start["id"] == "sub-7"


@pytest.mark.parametrize(
    ("inbound", "stage"),
    [
        ([{"type": "error", "payload": "nope"}], "ack"),
        ([ACK, ACK], "keepalive"),
    ],
)
def test_handshake_failure_releases_everything(inbound: list[Any], stage: str) -> None:
    opener = ScriptedOpener(ScriptedStream(inbound))
    with pytest.raises(HandshakeError) as exc:
        Subscription.establish(opener, request_body=BODY, settings=make_settings())
    assert exc.value.stage == stage
    assert opener.released


def test_start_failure_releases_everything() -> None:
    stream = ScriptedStream([ACK, KA])
    opener = ScriptedOpener(stream)

    original_send = stream.send

    def send(message: str) -> None:
        if '"start"' in message:
            raise ConnectionResetError("reset")
        original_send(message)

    stream.send = send  # type: ignore[method-assign]
    with pytest.raises(SendError):
        Subscription.establish(opener, request_body=BODY, settings=make_settings())
    assert opener.released


def test_next_decodes_data() -> None:
    sub, _ = _establish([data_frame({"data": {"x": 1}})])
    into: dict[str, Any] = {}
    response = sub.next(into)
    assert into == {"x": 1}
    assert response.errors is None


def test_next_decodes_partial_data_and_reports_remote_error() -> None:
    sub, _ = _establish([data_frame({"data": {"x": 1}, "errors": [{"message": "boom"}]})])
    into: dict[str, Any] = {}
    with pytest.raises(RemoteError) as exc:
        sub.next(into)
    assert into == {"x": 1}
    assert exc.value.raw == [{"message": "boom"}]
    assert sub.state is SubscriptionState.STREAMING


def test_next_keeps_wide_integers_exact() -> None:
    sub, _ = _establish(['{"type":"data","id":"1","payload":{"data":{"x":123456789012345678901234567890}}}'])
    into: dict[str, Any] = {}
    sub.next(into)
    assert into == {"x": 123456789012345678901234567890}


def test_next_error_frame_is_verbatim() -> None:
    sub, _ = _establish([{"type": "error", "id": "1", "payload": "boom"}, data_frame({"data": {"x": 2}})])
    with pytest.raises(RemoteError) as exc:
        sub.next({})
    assert str(exc.value) == "boom"
    # The stream stays open after an error frame; the caller decides.
    into: dict[str, Any] = {}
    sub.next(into)
    assert into == {"x": 2}


def test_next_error_frame_object_payload_keeps_source_text() -> None:
    sub, _ = _establish(['{"type":"error","id":"1","payload":{ "message" : "boom" }}'])
    with pytest.raises(RemoteError) as exc:
        sub.next({})
    assert str(exc.value) == '{ "message" : "boom" }'
    assert exc.value.raw == {"message": "boom"}
    assert sub.state is SubscriptionState.STREAMING


def test_next_unknown_frame_type() -> None:
    sub, _ = _establish([{"type": "unknown_type"}])
    with pytest.raises(ProtocolViolation) as exc:
        sub.next({})
    assert exc.value.got == "unknown_type"
    assert sub.state is SubscriptionState.STREAMING


def test_next_keepalive_violates_strict_mode() -> None:
    sub, _ = _establish([KA])
    with pytest.raises(ProtocolViolation) as exc:
        sub.next({})
    assert exc.value.got == "ka"


def test_next_skips_keepalives_in_lenient_mode() -> None:
    opener = ScriptedOpener(ScriptedStream([KA, ACK, KA, KA, data_frame({"data": {"x": 3}})]))
    sub = Subscription.establish(opener, request_body=BODY, settings=make_settings(strict=False))
    into: dict[str, Any] = {}
    sub.next(into)
    assert into == {"x": 3}


def test_next_decode_error() -> None:
    sub, _ = _establish([data_frame("not an object")])
    with pytest.raises(DecodeError):
        sub.next({})


def test_read_timeout_keeps_streaming() -> None:
    sub, opener = _establish([TimeoutError(), data_frame({"data": {"x": 1}})], read_timeout_s=0.25)
    with pytest.raises(ReadTimeoutError):
        sub.next({})
    assert sub.state is SubscriptionState.STREAMING
    assert opener.stream.recv_timeouts[-1] == 0.25
    sub.next({})


def test_transport_failure_is_terminal() -> None:
    sub, opener = _establish([])
    with pytest.raises(ReadError):
        sub.next({})
    assert sub.state is SubscriptionState.FAILED
    with pytest.raises(SubscriptionStateError):
        sub.next({})
    sub.close()
    assert sub.state is SubscriptionState.FAILED
    assert opener.released


def test_close_is_idempotent() -> None:
    sub, opener = _establish([])
    sub.close()
    sub.close()
    assert sub.state is SubscriptionState.CLOSED
    assert opener.released
    with pytest.raises(SubscriptionStateError) as exc:
        sub.next({})
    assert exc.value.state == "closed"


def test_context_manager_closes() -> None:
    sub, opener = _establish([data_frame({"data": {"x": 1}})])
    with sub:
        sub.next({})
    assert opener.released


@pytest.mark.parametrize(
    "state, terminal",
    [
        (SubscriptionState.PENDING, False),
        (SubscriptionState.HANDSHAKE_IN_FLIGHT, False),
        (SubscriptionState.STREAMING, False),
        (SubscriptionState.CLOSED, True),
        (SubscriptionState.FAILED, True),
    ],
)
def test_state_is_terminal(state: SubscriptionState, terminal: bool) -> None:
    assert state.is_terminal is terminal

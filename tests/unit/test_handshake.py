from __future__ import annotations

import itertools
from types import SimpleNamespace

import pytest

from gqlws.errors import EncodeError, HandshakeError
from gqlws.client.handshake import perform_handshake
from tests.fakes import KA, ACK, ScriptedStream, data_frame


def test_handshake_ok_sends_bare_init() -> None:
    stream = ScriptedStream([ACK, KA])
    perform_handshake(stream)
    assert stream.sent_frames == [{"type": "connection_init"}]


def test_handshake_sends_init_payload() -> None:
    stream = ScriptedStream([ACK, KA])
    perform_handshake(stream, {"authToken": "t"})
    assert stream.sent_frames == [{"type": "connection_init", "payload": {"authToken": "t"}}]


def test_handshake_rejects_non_ack() -> None:
    stream = ScriptedStream([KA, ACK])
    with pytest.raises(HandshakeError) as exc:
        perform_handshake(stream)
    assert exc.value.stage == "ack"
    assert exc.value.got == "ka"


def test_handshake_rejects_missing_keepalive() -> None:
    stream = ScriptedStream([ACK, data_frame({"data": {}})])
    with pytest.raises(HandshakeError) as exc:
        perform_handshake(stream)
    assert exc.value.stage == "keepalive"
    assert exc.value.got == "data"


def test_handshake_unknown_frame_type_reports_observed_type() -> None:
    stream = ScriptedStream([{"type": "connection_error"}])
    with pytest.raises(HandshakeError) as exc:
        perform_handshake(stream)
    assert exc.value.stage == "ack"
    assert exc.value.got == "connection_error"


def test_handshake_transport_failure_reports_stage() -> None:
    stream = ScriptedStream([ACK])
    with pytest.raises(HandshakeError) as exc:
        perform_handshake(stream)
    assert exc.value.stage == "keepalive"
    assert exc.value.got is None
    assert isinstance(exc.value.__cause__, ConnectionResetError)


def test_handshake_send_failure() -> None:
    stream = ScriptedStream([ACK, KA])
    stream.send_error = BrokenPipeError("gone")
    with pytest.raises(HandshakeError) as exc:
        perform_handshake(stream)
    assert exc.value.stage == "init"


def test_handshake_timeout() -> None:
    stream = ScriptedStream([TimeoutError()])
    with pytest.raises(HandshakeError) as exc:
        perform_handshake(stream, timeout_s=0.5)
    assert exc.value.stage == "ack"
    assert isinstance(exc.value.__cause__, TimeoutError)
    assert stream.recv_timeouts[0] is not None
    assert 0 < stream.recv_timeouts[0] <= 0.5


def test_handshake_unserializable_init_payload() -> None:
    stream = ScriptedStream([ACK, KA])
    with pytest.raises(EncodeError):
        perform_handshake(stream, {"bad": object()})
    assert stream.sent == []


def test_lenient_handshake_skips_keepalives_before_ack() -> None:
    stream = ScriptedStream([KA, KA, ACK])
    perform_handshake(stream, strict=False, timeout_s=1.0)
    assert len(stream.recv_timeouts) == 3


def test_lenient_handshake_still_requires_ack() -> None:
    stream = ScriptedStream([KA, data_frame({"data": {}})])
    with pytest.raises(HandshakeError) as exc:
        perform_handshake(stream, strict=False)
    assert exc.value.got == "data"


def test_handshake_deadline_spent_before_next_read(monkeypatch: pytest.MonkeyPatch) -> None:
    # deadline set at t=0; the ack read sees 0.1s elapsed, the keepalive read 5s
    clock = itertools.chain([0.0, 0.1], itertools.repeat(5.0))
    monkeypatch.setattr("gqlws.client.handshake.time", SimpleNamespace(monotonic=lambda: next(clock)))
    stream = ScriptedStream([ACK, KA])
    with pytest.raises(HandshakeError) as exc:
        perform_handshake(stream, timeout_s=1.0)
    assert exc.value.stage == "keepalive"
    assert exc.value.got is None
    assert isinstance(exc.value.__cause__, TimeoutError)
    assert len(stream.recv_timeouts) == 1

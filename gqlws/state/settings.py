"""Client settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TimeoutSettings:
    handshake_timeout_s: float | None
    read_timeout_s: float | None
    open_timeout_s: float | None
    server_start_timeout_s: float


@dataclass(frozen=True, slots=True)
class ProtocolSettings:
    strict_handshake: bool
    operation_id: str
    subprotocol: str | None
    max_message_bytes: int


@dataclass(frozen=True, slots=True)
class ClientSettings:
    timeouts: TimeoutSettings
    protocol: ProtocolSettings


__all__ = ["ClientSettings", "ProtocolSettings", "TimeoutSettings"]

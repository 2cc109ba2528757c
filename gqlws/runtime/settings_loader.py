"""Environment parsing for client settings."""

from __future__ import annotations

import os

from gqlws.state.settings import ClientSettings, TimeoutSettings, ProtocolSettings
from gqlws.config.transport import (
    ENV_GQLWS_SUBPROTOCOL,
    ENV_GQLWS_OPERATION_ID,
    ENV_GQLWS_READ_TIMEOUT_S,
    ENV_GQLWS_OPEN_TIMEOUT_S,
    DEFAULT_GQLWS_SUBPROTOCOL,
    ENV_GQLWS_STRICT_HANDSHAKE,
    DEFAULT_GQLWS_OPERATION_ID,
    ENV_GQLWS_MAX_MESSAGE_BYTES,
    DEFAULT_GQLWS_READ_TIMEOUT_S,
    DEFAULT_GQLWS_OPEN_TIMEOUT_S,
    ENV_GQLWS_HANDSHAKE_TIMEOUT_S,
    DEFAULT_GQLWS_STRICT_HANDSHAKE,
    DEFAULT_GQLWS_MAX_MESSAGE_BYTES,
    ENV_GQLWS_SERVER_START_TIMEOUT_S,
    DEFAULT_GQLWS_HANDSHAKE_TIMEOUT_S,
    DEFAULT_GQLWS_SERVER_START_TIMEOUT_S,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _deadline_env(name: str, default: float) -> float | None:
    value = _float_env(name, default)
    return value if value > 0 else None


def _optional_str_env(name: str, default: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    if v.lower() in {"", "none", "null", "off"}:
        return None
    return v


def _load_timeout_settings() -> TimeoutSettings:
    server_start = _float_env(ENV_GQLWS_SERVER_START_TIMEOUT_S, DEFAULT_GQLWS_SERVER_START_TIMEOUT_S)
    if server_start <= 0:
        server_start = DEFAULT_GQLWS_SERVER_START_TIMEOUT_S

    return TimeoutSettings(
        handshake_timeout_s=_deadline_env(ENV_GQLWS_HANDSHAKE_TIMEOUT_S, DEFAULT_GQLWS_HANDSHAKE_TIMEOUT_S),
        read_timeout_s=_deadline_env(ENV_GQLWS_READ_TIMEOUT_S, DEFAULT_GQLWS_READ_TIMEOUT_S),
        open_timeout_s=_deadline_env(ENV_GQLWS_OPEN_TIMEOUT_S, DEFAULT_GQLWS_OPEN_TIMEOUT_S),
        server_start_timeout_s=server_start,
    )


def _load_protocol_settings() -> ProtocolSettings:
    max_message_bytes = _int_env(ENV_GQLWS_MAX_MESSAGE_BYTES, DEFAULT_GQLWS_MAX_MESSAGE_BYTES)

    return ProtocolSettings(
        strict_handshake=_bool_env(ENV_GQLWS_STRICT_HANDSHAKE, DEFAULT_GQLWS_STRICT_HANDSHAKE),
        operation_id=_str_env(ENV_GQLWS_OPERATION_ID, DEFAULT_GQLWS_OPERATION_ID),
        subprotocol=_optional_str_env(ENV_GQLWS_SUBPROTOCOL, DEFAULT_GQLWS_SUBPROTOCOL),
        max_message_bytes=max(1, max_message_bytes),
    )


def load_settings() -> ClientSettings:
    return ClientSettings(
        timeouts=_load_timeout_settings(),
        protocol=_load_protocol_settings(),
    )


__all__ = ["load_settings"]

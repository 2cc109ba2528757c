"""Transport configuration (env names and defaults only)."""

from __future__ import annotations

ENV_GQLWS_HANDSHAKE_TIMEOUT_S = "GQLWS_HANDSHAKE_TIMEOUT_S"
ENV_GQLWS_READ_TIMEOUT_S = "GQLWS_READ_TIMEOUT_S"
ENV_GQLWS_OPEN_TIMEOUT_S = "GQLWS_OPEN_TIMEOUT_S"
ENV_GQLWS_SERVER_START_TIMEOUT_S = "GQLWS_SERVER_START_TIMEOUT_S"
ENV_GQLWS_STRICT_HANDSHAKE = "GQLWS_STRICT_HANDSHAKE"
ENV_GQLWS_MAX_MESSAGE_BYTES = "GQLWS_MAX_MESSAGE_BYTES"
ENV_GQLWS_OPERATION_ID = "GQLWS_OPERATION_ID"
ENV_GQLWS_SUBPROTOCOL = "GQLWS_SUBPROTOCOL"

# Timeouts <= 0 disable the deadline (block until a frame or a transport error).
DEFAULT_GQLWS_HANDSHAKE_TIMEOUT_S = 10.0
DEFAULT_GQLWS_READ_TIMEOUT_S = 0.0
DEFAULT_GQLWS_OPEN_TIMEOUT_S = 10.0
DEFAULT_GQLWS_SERVER_START_TIMEOUT_S = 10.0
DEFAULT_GQLWS_STRICT_HANDSHAKE = True
DEFAULT_GQLWS_MAX_MESSAGE_BYTES = 16 * 1024 * 1024
# One subscription per connection, so a fixed correlation id is enough.
DEFAULT_GQLWS_OPERATION_ID = "1"
DEFAULT_GQLWS_SUBPROTOCOL = "graphql-ws"

# Ephemeral listener
SERVER_HOST = "127.0.0.1"
SERVER_POLL_INTERVAL_S = 0.01
SERVER_STOP_TIMEOUT_S = 5.0

__all__ = [
    "ENV_GQLWS_HANDSHAKE_TIMEOUT_S",
    "ENV_GQLWS_READ_TIMEOUT_S",
    "ENV_GQLWS_OPEN_TIMEOUT_S",
    "ENV_GQLWS_SERVER_START_TIMEOUT_S",
    "ENV_GQLWS_STRICT_HANDSHAKE",
    "ENV_GQLWS_MAX_MESSAGE_BYTES",
    "ENV_GQLWS_OPERATION_ID",
    "ENV_GQLWS_SUBPROTOCOL",
    "DEFAULT_GQLWS_HANDSHAKE_TIMEOUT_S",
    "DEFAULT_GQLWS_READ_TIMEOUT_S",
    "DEFAULT_GQLWS_OPEN_TIMEOUT_S",
    "DEFAULT_GQLWS_SERVER_START_TIMEOUT_S",
    "DEFAULT_GQLWS_STRICT_HANDSHAKE",
    "DEFAULT_GQLWS_MAX_MESSAGE_BYTES",
    "DEFAULT_GQLWS_OPERATION_ID",
    "DEFAULT_GQLWS_SUBPROTOCOL",
    "SERVER_HOST",
    "SERVER_POLL_INTERVAL_S",
    "SERVER_STOP_TIMEOUT_S",
]

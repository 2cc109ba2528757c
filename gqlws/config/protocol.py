"""graphql-ws frame protocol constants."""

from __future__ import annotations

# Frame keys
FRAME_KEY_TYPE = "type"
FRAME_KEY_ID = "id"
FRAME_KEY_PAYLOAD = "payload"

# Frame types
GQL_CONNECTION_INIT = "connection_init"  # Client -> Server
GQL_START = "start"  # Client -> Server
GQL_CONNECTION_ACK = "connection_ack"  # Server -> Client
GQL_CONNECTION_KEEP_ALIVE = "ka"  # Server -> Client
GQL_DATA = "data"  # Server -> Client
GQL_ERROR = "error"  # Server -> Client

KNOWN_FRAME_TYPES = frozenset(
    {
        GQL_CONNECTION_INIT,
        GQL_START,
        GQL_CONNECTION_ACK,
        GQL_CONNECTION_KEEP_ALIVE,
        GQL_DATA,
        GQL_ERROR,
    }
)

# Request payload keys
REQUEST_KEY_QUERY = "query"
REQUEST_KEY_VARIABLES = "variables"
REQUEST_KEY_OPERATION_NAME = "operationName"

# Response payload keys
RESPONSE_KEY_DATA = "data"
RESPONSE_KEY_ERRORS = "errors"
RESPONSE_KEY_EXTENSIONS = "extensions"

# Handshake stages reported on HandshakeError
STAGE_INIT = "init"
STAGE_ACK = "ack"
STAGE_KEEPALIVE = "keepalive"

CONTENT_TYPE_JSON = "application/json"

__all__ = [
    "FRAME_KEY_TYPE",
    "FRAME_KEY_ID",
    "FRAME_KEY_PAYLOAD",
    "GQL_CONNECTION_INIT",
    "GQL_START",
    "GQL_CONNECTION_ACK",
    "GQL_CONNECTION_KEEP_ALIVE",
    "GQL_DATA",
    "GQL_ERROR",
    "KNOWN_FRAME_TYPES",
    "REQUEST_KEY_QUERY",
    "REQUEST_KEY_VARIABLES",
    "REQUEST_KEY_OPERATION_NAME",
    "RESPONSE_KEY_DATA",
    "RESPONSE_KEY_ERRORS",
    "RESPONSE_KEY_EXTENSIONS",
    "STAGE_INIT",
    "STAGE_ACK",
    "STAGE_KEEPALIVE",
    "CONTENT_TYPE_JSON",
]

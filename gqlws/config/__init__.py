"""Configuration module exports (constants only)."""

from .protocol import KNOWN_FRAME_TYPES
from .transport import DEFAULT_GQLWS_OPERATION_ID, DEFAULT_GQLWS_SUBPROTOCOL

__all__ = [
    "DEFAULT_GQLWS_OPERATION_ID",
    "DEFAULT_GQLWS_SUBPROTOCOL",
    "KNOWN_FRAME_TYPES",
]

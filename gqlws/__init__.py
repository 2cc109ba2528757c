"""Test client for GraphQL servers over HTTP and the graphql-ws subscription transport."""

from .client import (
    Client,
    Option,
    Subscription,
    var,
    path,
    add_cookie,
    add_header,
    basic_auth,
    operation,
)
from .errors import (
    GqlwsError,
    DialError,
    ReadError,
    SendError,
    DecodeError,
    EncodeError,
    RemoteError,
    HandshakeError,
    MalformedFrame,
    HTTPStatusError,
    ReadTimeoutError,
    ProtocolViolation,
    SubscriptionStateError,
)
from .protocol import Request, Response
from .state import SubscriptionState

__version__ = "0.1.0"

__all__ = [
    "Client",
    "DecodeError",
    "DialError",
    "EncodeError",
    "GqlwsError",
    "HTTPStatusError",
    "HandshakeError",
    "MalformedFrame",
    "Option",
    "ProtocolViolation",
    "ReadError",
    "ReadTimeoutError",
    "RemoteError",
    "Request",
    "Response",
    "SendError",
    "Subscription",
    "SubscriptionState",
    "SubscriptionStateError",
    "add_cookie",
    "add_header",
    "basic_auth",
    "operation",
    "path",
    "var",
]

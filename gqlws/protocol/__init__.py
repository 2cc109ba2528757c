from .codec import Frame, decode_frame, encode_frame, decode_request, encode_request, decode_response
from .remote import RemoteErrorEntry, has_errors, parse_error_entries
from .messages import Request, HttpParts, Response

__all__ = [
    "Frame",
    "HttpParts",
    "RemoteErrorEntry",
    "Request",
    "Response",
    "decode_frame",
    "decode_request",
    "decode_response",
    "encode_frame",
    "encode_request",
    "has_errors",
    "parse_error_entries",
]

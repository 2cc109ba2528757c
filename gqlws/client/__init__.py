from .client import Client
from .request import Option, var, path, add_cookie, add_header, basic_auth, operation, build_request
from .subscription import Subscription

__all__ = [
    "Client",
    "Option",
    "Subscription",
    "add_cookie",
    "add_header",
    "basic_auth",
    "build_request",
    "operation",
    "path",
    "var",
]

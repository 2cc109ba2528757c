"""Connection collaborators: the ephemeral listener and the WebSocket dialer."""

from __future__ import annotations

import time
import socket
import logging
import threading
from typing import Any, Protocol
from collections.abc import Iterable

import uvicorn
from websockets.sync.client import connect
from websockets.typing import Subprotocol
from websockets.exceptions import WebSocketException

from gqlws.errors import DialError
from gqlws.config.transport import SERVER_HOST, SERVER_STOP_TIMEOUT_S, SERVER_POLL_INTERVAL_S

logger = logging.getLogger(__name__)


class FrameStream(Protocol):
    """A bidirectional text frame stream with one reader and one writer."""

    def send(self, message: str) -> None: ...

    def recv(self, timeout: float | None = None) -> str | bytes: ...

    def close(self) -> None: ...


def dial(
    url: str,
    headers: Iterable[tuple[str, str]] = (),
    *,
    subprotocol: str | None = None,
    open_timeout_s: float | None = None,
    max_size: int | None = None,
) -> FrameStream:
    try:
        return connect(
            url,
            additional_headers=list(headers),
            subprotocols=[Subprotocol(subprotocol)] if subprotocol else None,
            open_timeout=open_timeout_s,
            max_size=max_size,
        )
    except (OSError, TimeoutError, WebSocketException) as exc:
        raise DialError(f"{url}: {exc}") from exc


class EphemeralServer:
    """Serve an ASGI handler on a loopback port picked by the OS.

    The server runs uvicorn in a daemon thread and lives exactly as long as
    the subscription that created it.
    """

    def __init__(self, app: Any, *, start_timeout_s: float, host: str = SERVER_HOST) -> None:
        self._app = app
        self._host = host
        self._start_timeout_s = start_timeout_s
        self._socket: socket.socket | None = None
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None
        self._closed = False
        self.port: int | None = None

    @property
    def url(self) -> str:
        if self.port is None:
            raise RuntimeError("ephemeral server is not started")
        return f"ws://{self._host}:{self.port}"

    def start(self) -> EphemeralServer:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._socket = sock
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self._host, 0))
        except OSError as exc:
            self.close()
            raise DialError(f"listener bind on {self._host}: {exc}") from exc
        self.port = sock.getsockname()[1]

        config = uvicorn.Config(self._app, log_level="warning", log_config=None, lifespan="auto")
        server = uvicorn.Server(config)
        self._server = server
        thread = threading.Thread(
            target=server.run,
            kwargs={"sockets": [sock]},
            name=f"gqlws-listener-{self.port}",
            daemon=True,
        )
        self._thread = thread
        thread.start()

        deadline = time.monotonic() + self._start_timeout_s
        while not server.started:
            if not thread.is_alive():
                self.close()
                raise DialError(f"listener on port {self.port} exited during startup")
            if time.monotonic() >= deadline:
                self.close()
                raise DialError(f"listener on port {self.port} did not start within {self._start_timeout_s}s")
            time.sleep(SERVER_POLL_INTERVAL_S)
        logger.debug("listener: ready port=%s", self.port)
        return self

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=SERVER_STOP_TIMEOUT_S)
            if self._thread.is_alive():
                logger.warning("listener: port=%s did not stop within %ss", self.port, SERVER_STOP_TIMEOUT_S)
        if self._socket is not None:
            self._socket.close()
        logger.debug("listener: closed port=%s", self.port)

    def __enter__(self) -> EphemeralServer:
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["EphemeralServer", "FrameStream", "dial"]

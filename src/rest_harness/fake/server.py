"""
Run an ASGI app under uvicorn in a background thread.

Used by socket-level tests and by ``invoke serve-fake``.
"""
import logging
import socket
import threading
import time
from typing import Optional

import uvicorn

logger = logging.getLogger(__name__)


def find_free_port(host: str = '127.0.0.1') -> int:
    """Ask the OS for a port that is currently unused on host."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return s.getsockname()[1]


class RunningServer:
    """Handle for a uvicorn server started with serve_in_thread()."""

    def __init__(self, server: uvicorn.Server, thread: threading.Thread, host: str, port: int):
        self._server = server
        self._thread = thread
        self.host = host
        self.port = port

    @property
    def url(self) -> str:
        return f'http://{self.host}:{self.port}'

    def stop(self, timeout: float = 5.0) -> None:
        self._server.should_exit = True
        self._thread.join(timeout)
        logger.debug(f"Stopped server at {self.url}")

    def __enter__(self) -> 'RunningServer':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def serve_in_thread(app, host: str = '127.0.0.1', port: Optional[int] = None,
                    startup_timeout: float = 10.0) -> RunningServer:
    """
    Start app on host:port and wait until it accepts connections.

    Args:
        app: ASGI application
        host: Interface to bind
        port: Port to bind; a free one is chosen when None
        startup_timeout: Seconds to wait for uvicorn to report it started

    Returns:
        RunningServer; stop it explicitly or use it as a context manager

    Raises:
        RuntimeError: If the server does not start in time
    """
    port = port or find_free_port(host)
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level='warning',
        lifespan='off',
        timeout_graceful_shutdown=1,
    )
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, name=f'uvicorn-{port}', daemon=True)
    thread.start()

    deadline = time.monotonic() + startup_timeout
    while not server.started:
        if not thread.is_alive() or time.monotonic() > deadline:
            server.should_exit = True
            raise RuntimeError(f"Server on {host}:{port} did not start")
        time.sleep(0.01)

    logger.debug(f"Serving {app!r} at http://{host}:{port}")
    return RunningServer(server, thread, host, port)

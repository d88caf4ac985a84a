# browserspec/server.py
"""
The fixture HTTP server.

A FastAPI application serves the static HTML fixtures plus a handful of
dynamic pages (plain text, form echo, cookies, header echo). `FixtureServer`
runs it with uvicorn on a background thread for the duration of a test run.
"""
import socket
import threading
import time
from pathlib import Path
from typing import List, Optional, Sequence

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, Response

from browserspec.exceptions import ServerError
from browserspec.utils.logger import setup_logger

logger = setup_logger(__name__)

STARTUP_TIMEOUT_S = 10.0


def find_fixture(html_dirs: Sequence[str], path: str) -> Optional[Path]:
    """Looks a request path up across the fixture directories, first hit wins.

    Paths that resolve outside their fixture directory are never served.
    """
    for html_dir in html_dirs:
        root = Path(html_dir).resolve()
        candidate = (root / path).resolve()
        if root != candidate and root not in candidate.parents:
            continue
        if candidate.is_file():
            return candidate
    return None


def create_app(html_dirs: List[str]) -> FastAPI:
    """Builds the fixture application.

    `html_dirs` is read on every request, so directories appended after the
    app was created are served too.
    """
    app = FastAPI(title="browserspec fixture server", docs_url=None, redoc_url=None)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        return "Hello, world!"

    @app.get("/plain_text", response_class=PlainTextResponse)
    async def plain_text() -> str:
        return "This is text/plain"

    @app.post("/post_to_me", response_class=PlainTextResponse)
    async def post_to_me(request: Request) -> str:
        body = (await request.body()).decode("utf-8", errors="replace")
        return f"You posted the following content:\n{body}"

    @app.get("/header_echo", response_class=HTMLResponse)
    async def header_echo(request: Request) -> str:
        rows = "".join(
            f"<li>{name}: {value}</li>" for name, value in request.headers.items()
        )
        return f"<html><head><title>Header echo</title></head><body><ul>{rows}</ul></body></html>"

    @app.get("/{path:path}")
    async def fixture(path: str) -> Response:
        if path.startswith("set_cookie"):
            response = HTMLResponse("<html>C is for cookie, it's good enough for me</html>")
            response.set_cookie("monster", "1")
            return response
        if path.startswith("encodable_"):
            return HTMLResponse("page with characters in URI that need encoding")

        found = find_fixture(html_dirs, path)
        if found is None:
            return PlainTextResponse("Not found", status_code=404)
        return FileResponse(found)

    return app


def find_free_port(bind: str) -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((bind, 0))
        return sock.getsockname()[1]


class FixtureServer:
    """Runs the fixture app on a background thread.

    :param html_dirs: Directories searched for fixture files.
    :type html_dirs: List[str]
    :param bind: Address to bind to.
    :type bind: str
    :param port: Port to bind to; 0 picks a free port once, on first access.
    :type port: int
    """

    def __init__(self, html_dirs: List[str], bind: str = "127.0.0.1", port: int = 0):
        self.html_dirs = html_dirs
        self.bind = bind
        self._port = port
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        if not self._port:
            self._port = find_free_port(self.bind)
        return self._port

    @property
    def running(self) -> bool:
        return (
            self._server is not None
            and self._server.started
            and self._thread is not None
            and self._thread.is_alive()
        )

    def _bind_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.bind, self.port))
        except OSError as e:
            sock.close()
            raise ServerError(
                f"Fixture server could not bind {self.bind}:{self.port}: {e}",
                bind=self.bind,
                port=self.port,
            ) from e
        return sock

    def start(self, timeout: float = STARTUP_TIMEOUT_S) -> None:
        """Binds the socket and serves on a daemon thread until `stop()`.

        :raises ServerError: If the address cannot be bound or the server does not come up in time.
        """
        if self.running:
            return

        sock = self._bind_socket()
        config = uvicorn.Config(
            create_app(self.html_dirs), log_level="warning", lifespan="off"
        )
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._server.run,
            kwargs={"sockets": [sock]},
            name="browserspec-fixture-server",
            daemon=True,
        )
        self._thread.start()

        deadline = time.monotonic() + timeout
        while not self._server.started:
            if not self._thread.is_alive() or time.monotonic() > deadline:
                self._server.should_exit = True
                sock.close()
                raise ServerError(
                    f"Fixture server on {self.bind}:{self.port} did not start",
                    bind=self.bind,
                    port=self.port,
                )
            time.sleep(0.05)

        logger.info(
            "Fixture server started",
            extra={"bind": self.bind, "port": self.port, "html_dirs": list(self.html_dirs)},
        )

    def stop(self, timeout: float = STARTUP_TIMEOUT_S) -> None:
        if self._server is None:
            return
        self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout)
        self._server = None
        self._thread = None
        logger.info("Fixture server stopped", extra={"bind": self.bind, "port": self.port})

    def __enter__(self) -> "FixtureServer":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def serve_forever(self) -> None:
        """Serves in the foreground until interrupted."""
        sock = self._bind_socket()
        config = uvicorn.Config(create_app(self.html_dirs), log_level="info", lifespan="off")
        self._server = uvicorn.Server(config)
        try:
            self._server.run(sockets=[sock])
        finally:
            self._server = None

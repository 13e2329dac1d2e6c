import asyncio
import socket
import sys

import uvicorn
from fastapi import FastAPI

from ip_location.config import Settings, get_settings
from ip_location.errors import ServerStartupError
from ip_location.logger import configure_logging, logger
from ip_location.main import app as default_app

STARTUP_POLL_SECONDS = 0.01


class LocationServer:
    """Owns the listening socket and the uvicorn accept loop.

    uvicorn runs each request as its own task, so a slow upstream lookup never
    blocks accepting further connections.
    """

    def __init__(self, app: FastAPI, host: str = "0.0.0.0", port: int = 8000, log_level: str = "info") -> None:
        self.app = app
        self.host = host
        self.port = port
        self._log_level = log_level.lower()
        self._server: uvicorn.Server | None = None
        self._task: asyncio.Task | None = None

    @classmethod
    def from_settings(cls, settings: Settings, app: FastAPI | None = None) -> "LocationServer":
        return cls(
            app if app is not None else default_app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level,
        )

    @property
    def started(self) -> bool:
        return self._server is not None and self._server.started

    def _bind(self) -> socket.socket:
        family = socket.AF_INET6 if ":" in self.host else socket.AF_INET
        try:
            sock = socket.create_server((self.host, self.port), family=family)
        except OSError as exc:
            raise ServerStartupError(f"Could not bind {self.host}:{self.port}: {exc}") from exc
        # port 0 asks the OS for a free port
        self.port = sock.getsockname()[1]
        return sock

    async def start(self) -> None:
        """Bind the socket and wait until uvicorn is accepting connections."""
        if self._task is not None:
            raise ServerStartupError("Server is already running")

        sock = self._bind()
        config = uvicorn.Config(self.app, log_config=None, log_level=self._log_level)
        self._server = uvicorn.Server(config)
        self._task = asyncio.create_task(self._server.serve(sockets=[sock]))

        while not self._server.started:
            if self._task.done():
                task, self._task, self._server = self._task, None, None
                sock.close()
                task.result()
                raise ServerStartupError(f"Server exited during startup on {self.host}:{self.port}")
            await asyncio.sleep(STARTUP_POLL_SECONDS)

        logger.info(f"Listening on http://{self.host}:{self.port}")

    async def stop(self) -> None:
        """Ask uvicorn to shut down and wait for open connections to finish."""
        if self._server is None or self._task is None:
            return
        self._server.should_exit = True
        try:
            await self._task
        finally:
            self._server = None
            self._task = None
        logger.info(f"Stopped listening on http://{self.host}:{self.port}")

    async def serve_forever(self) -> None:
        """Start and keep serving until uvicorn is told to exit (e.g. SIGINT)."""
        await self.start()
        try:
            await self._task
        finally:
            self._server = None
            self._task = None

    def run(self) -> None:
        asyncio.run(self.serve_forever())


def main() -> None:
    """Run the IP location service until it fails to start or is interrupted."""
    settings = get_settings()
    configure_logging(settings.log_level)
    server = LocationServer.from_settings(settings)
    try:
        server.run()
    except ServerStartupError as exc:
        logger.error(f"Server startup failed: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        # uvicorn re-raises the SIGINT it captured once shutdown has finished.
        logger.info("Interrupted, IP Location Service stopped")

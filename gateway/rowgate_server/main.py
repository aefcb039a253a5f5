"""
Rowgate Server - Main entry point.

This module starts the gateway:
- Opens the store connection (fatal on failure)
- Binds the HTTP server (GET /data, GET /health)

Usage:
    python -m gateway.rowgate_server.main

Configuration is entirely via environment variables.
See config.py for all available settings.

Invariants:
    - The store connects before the HTTP port is bound
    - A ConnectError exits with status 1 and no port is ever bound
    - Graceful shutdown unbinds the port before closing the store
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

import json_log_formatter
from aiohttp import web

from .api import create_http_app, start_http_site
from .config import ServerConfig
from .errors import ConnectError
from .service import QueryGateway
from .store import StoreConnection

logger = logging.getLogger(__name__)


def setup_logging(config: ServerConfig) -> None:
    """Configure logging based on configuration.

    Args:
        config: Server configuration
    """
    level = getattr(logging, config.observability.log_level.upper(), logging.INFO)

    if config.observability.log_format == "json":
        formatter = json_log_formatter.JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    # Reduce noise from libraries
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


class Server:
    """Rowgate server orchestrator.

    Manages the lifecycle of:
    - The store connection
    - The query gateway
    - The HTTP site

    Attributes:
        config: Server configuration
        gateway: Query gateway (created in start())
        runner: aiohttp runner, set only once the port is bound

    Example:
        >>> server = Server()
        >>> await server.start()
        >>> # Server is running
        >>> await server.stop()
    """

    def __init__(self, config: ServerConfig | None = None) -> None:
        """Initialize the server.

        Args:
            config: Optional server configuration (loaded from env if not provided)
        """
        self.config = config or ServerConfig.from_env()
        self._running = False
        self._shutdown_event = asyncio.Event()

        # Components (initialized in start())
        self.gateway: QueryGateway | None = None
        self.runner: web.AppRunner | None = None

    async def start(self, wait: bool = True) -> None:
        """Start the server.

        Args:
            wait: Block until request_shutdown() is called

        Raises:
            ConnectError: If the store cannot be opened; nothing is bound
        """
        if self._running:
            logger.warning("Server already running")
            return

        logger.info("Starting Rowgate server")
        self.config.log_config()

        store = StoreConnection(
            database=self.config.store.database,
            table=self.config.store.table,
            busy_timeout_ms=self.config.store.busy_timeout_ms,
        )
        self.gateway = QueryGateway(store)

        try:
            await self.gateway.start()

            app = create_http_app(self.gateway, self.config.http)
            self.runner = await start_http_site(app, self.config.http.host, self.config.http.port)
        except Exception as e:
            logger.error(f"Server startup failed: {e}", exc_info=not isinstance(e, ConnectError))
            await self._cleanup()
            raise

        self._running = True
        logger.info("Rowgate server started successfully")

        if wait:
            await self._shutdown_event.wait()

    async def _cleanup(self) -> None:
        if self.runner:
            await self.runner.cleanup()
            self.runner = None

        if self.gateway:
            await self.gateway.close()

    async def stop(self) -> None:
        """Stop the server gracefully."""
        if not self._running:
            return

        logger.info("Stopping Rowgate server")
        await self._cleanup()

        self._running = False
        logger.info("Rowgate server stopped")

    def request_shutdown(self) -> None:
        """Request graceful shutdown."""
        self._shutdown_event.set()


def main() -> None:
    """Main entry point."""
    # Load configuration
    try:
        config = ServerConfig.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    # Setup logging
    setup_logging(config)

    # Create server
    server = Server(config)

    # Setup signal handlers
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    def handle_signal(sig: int) -> None:
        logger.info(f"Received signal {sig}, initiating shutdown")
        server.request_shutdown()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, handle_signal, sig)

    exit_code = 0

    # Run server
    try:
        loop.run_until_complete(server.start())
    except ConnectError as e:
        logger.error(f"Cannot connect to store, exiting: {e}", extra={"database": e.database})
        exit_code = 1
    except KeyboardInterrupt:
        pass
    finally:
        loop.run_until_complete(server.stop())
        loop.close()

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
